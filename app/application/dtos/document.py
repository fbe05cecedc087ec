"""DTOs for document registration and verification (no ledger or HTTP dependency)."""

from dataclasses import dataclass

from app.domain.entities.document_record import DocumentRecord
from app.domain.enums import VerificationReason


@dataclass(frozen=True)
class DocumentMetadata:
    """Issuer-supplied fields anchored on the ledger next to the hash.

    issue_date is seconds since epoch. Validated by UploadPolicy before the
    registration pipeline starts.
    """

    owner_id: str
    owner_name: str
    document_type: str
    issuer_organization: str
    issue_date: int


@dataclass(frozen=True)
class EncryptionEnvelope:
    """Output of one vault encryption.

    key never leaves the service except through RegistrationReceipt;
    nonce, ciphertext and mac are persisted together in the artifact.
    """

    key: bytes
    nonce: bytes
    ciphertext: bytes
    mac: bytes

    def __repr__(self) -> str:
        return (
            f"EncryptionEnvelope(nonce={self.nonce.hex()}, "
            f"ciphertext=<{len(self.ciphertext)} bytes>)"
        )


@dataclass(frozen=True)
class RegistrationReceipt:
    """Result of a successful registration. The only place the key is surfaced."""

    document_id: str
    document_hash: str
    encryption_key: str
    transaction_hash: str
    artifact_ref: str
    verification_url: str

    def __repr__(self) -> str:
        return (
            f"RegistrationReceipt(document_id={self.document_id!r}, "
            f"document_hash={self.document_hash!r}, "
            f"transaction_hash={self.transaction_hash!r})"
        )


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verify-by-id or verify-by-file."""

    verified: bool
    reason: VerificationReason
    document: DocumentRecord | None = None
    message: str | None = None
