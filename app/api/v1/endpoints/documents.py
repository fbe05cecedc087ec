"""Document API: thin route delegating registration to DocumentRegistrationService."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_registration_service
from app.application.dtos.document import DocumentMetadata
from app.application.use_cases.documents import DocumentRegistrationService
from app.core.limiter import limit_upload
from app.schemas.document import DocumentRegistrationResponse

router = APIRouter()


@router.post(
    "",
    response_model=DocumentRegistrationResponse,
    status_code=201,
)
@limit_upload
async def register_document(
    request: Request,
    registration: Annotated[
        DocumentRegistrationService, Depends(get_registration_service)
    ],
    document: UploadFile = File(...),
    owner_id: str = Form(..., alias="ownerId"),
    owner_name: str = Form(..., alias="ownerName"),
    document_type: str = Form(..., alias="documentType"),
    issuer_organization: str = Form(..., alias="issuerOrganization"),
    issue_date: int = Form(..., alias="issueDate"),
) -> DocumentRegistrationResponse:
    """Fingerprint, encrypt and anchor a document on the ledger.

    The response carries the only copy of the encryption key.
    """
    receipt = await registration.register(
        document.file,
        filename=document.filename,
        mime_type=document.content_type,
        metadata=DocumentMetadata(
            owner_id=owner_id,
            owner_name=owner_name,
            document_type=document_type,
            issuer_organization=issuer_organization,
            issue_date=issue_date,
        ),
    )
    return DocumentRegistrationResponse(
        document_id=receipt.document_id,
        document_hash=receipt.document_hash,
        encryption_key=receipt.encryption_key,
        transaction_hash=receipt.transaction_hash,
        verification_url=receipt.verification_url,
    )
