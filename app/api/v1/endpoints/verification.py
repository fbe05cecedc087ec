"""Verification API: by document id or by re-hashing an uploaded file."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.api.v1.dependencies import get_verification_service
from app.application.use_cases.documents import DocumentVerificationService
from app.core.limiter import limit_verify
from app.schemas.verification import VerificationResponse

router = APIRouter()


@router.get(
    "/verify/{document_id}",
    response_model=VerificationResponse,
    response_model_exclude_none=True,
)
@limit_verify
async def verify_by_id(
    request: Request,
    document_id: str,
    verification: Annotated[
        DocumentVerificationService, Depends(get_verification_service)
    ],
) -> VerificationResponse:
    """Return the ledger record for document_id (404 if not registered)."""
    result = await verification.verify_by_id(document_id)
    return VerificationResponse.from_result(result)


@router.post(
    "/verify-file",
    response_model=VerificationResponse,
    response_model_exclude_none=True,
)
@limit_verify
async def verify_by_file(
    request: Request,
    verification: Annotated[
        DocumentVerificationService, Depends(get_verification_service)
    ],
    document: UploadFile = File(...),
) -> VerificationResponse:
    """Hash the uploaded file and check it against the ledger. The file is not stored."""
    try:
        result = await verification.verify_by_file(document.file)
    finally:
        await document.close()
    return VerificationResponse.from_result(result)
