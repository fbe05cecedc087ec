"""Pydantic request/response schemas for the API."""

from app.schemas.document import DocumentRecordResponse, DocumentRegistrationResponse
from app.schemas.health import HealthResponse, LedgerStatus
from app.schemas.verification import VerificationResponse

__all__ = [
    "DocumentRecordResponse",
    "DocumentRegistrationResponse",
    "HealthResponse",
    "LedgerStatus",
    "VerificationResponse",
]
