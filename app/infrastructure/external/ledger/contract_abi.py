"""ABI of the DocumentVerification registry contract.

Only the functions this service calls. The record tuple layout is shared by
getDocument, verifyDocumentById and verifyDocumentByHash.
"""

from typing import Any

DOCUMENT_RECORD_FIELDS = (
    ("documentId", "string"),
    ("documentHash", "string"),
    ("ownerId", "string"),
    ("ownerName", "string"),
    ("documentType", "string"),
    ("issuerOrganization", "string"),
    ("issueDate", "uint256"),
    ("uploadDate", "uint256"),
    ("uploader", "address"),
    ("isValid", "bool"),
)


def _param(name: str, abi_type: str) -> dict[str, str]:
    return {"internalType": abi_type, "name": name, "type": abi_type}


def _record_output() -> list[dict[str, Any]]:
    return [
        {
            "components": [_param(n, t) for n, t in DOCUMENT_RECORD_FIELDS],
            "internalType": "struct DocumentVerification.Document",
            "name": "",
            "type": "tuple",
        }
    ]


def _function(
    name: str,
    inputs: list[dict[str, str]],
    outputs: list[dict[str, Any]],
    mutability: str,
) -> dict[str, Any]:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": outputs,
        "stateMutability": mutability,
        "type": "function",
    }


DOCUMENT_REGISTRY_ABI: list[dict[str, Any]] = [
    _function(
        "registerDocument",
        [
            _param("_documentId", "string"),
            _param("_documentHash", "string"),
            _param("_ownerId", "string"),
            _param("_ownerName", "string"),
            _param("_documentType", "string"),
            _param("_issuerOrganization", "string"),
            _param("_issueDate", "uint256"),
        ],
        [_param("", "bool")],
        "nonpayable",
    ),
    # Declared non-view by the deployed contract; kept for completeness only.
    _function(
        "verifyDocumentById",
        [_param("_documentId", "string")],
        _record_output(),
        "nonpayable",
    ),
    _function(
        "verifyDocumentByHash",
        [_param("_documentHash", "string")],
        _record_output(),
        "view",
    ),
    _function(
        "getDocument",
        [_param("_documentId", "string")],
        _record_output(),
        "view",
    ),
    _function(
        "documentExists",
        [_param("_documentId", "string")],
        [_param("", "bool")],
        "view",
    ),
    _function(
        "hashAlreadyRegistered",
        [_param("_documentHash", "string")],
        [_param("", "bool")],
        "view",
    ),
]
