"""Verification API schemas."""

from app.application.dtos.document import VerificationResult
from app.domain.enums import VerificationReason
from app.schemas.document import CamelModel, DocumentRecordResponse


class VerificationResponse(CamelModel):
    """Response for GET /verify/{document_id} and POST /verify-file."""

    success: bool = True
    verified: bool
    reason: VerificationReason
    document: DocumentRecordResponse | None = None
    message: str | None = None

    @classmethod
    def from_result(cls, result: VerificationResult) -> "VerificationResponse":
        return cls(
            verified=result.verified,
            reason=result.reason,
            document=(
                DocumentRecordResponse.from_record(result.document)
                if result.document is not None
                else None
            ),
            message=result.message,
        )
