"""Application DTOs (no ledger client or HTTP dependency)."""

from app.application.dtos.document import (
    DocumentMetadata,
    EncryptionEnvelope,
    RegistrationReceipt,
    VerificationResult,
)
from app.application.dtos.ledger import LedgerHealth, LedgerWriteResult

__all__ = [
    "DocumentMetadata",
    "EncryptionEnvelope",
    "LedgerHealth",
    "LedgerWriteResult",
    "RegistrationReceipt",
    "VerificationResult",
]
