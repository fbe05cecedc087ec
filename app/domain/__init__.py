"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import DocumentRecord
from app.domain.enums import RegistrationStage, VerificationReason
from app.domain.exceptions import (
    CryptoException,
    DocLedgerException,
    DocumentNotFoundException,
    DuplicateDocumentException,
    IntegrityException,
    LedgerException,
    LedgerTimeoutException,
    LedgerUnavailableException,
    LedgerWriteException,
    ValidationException,
)

__all__ = [
    # Entities
    "DocumentRecord",
    # Enums
    "RegistrationStage",
    "VerificationReason",
    # Exceptions
    "CryptoException",
    "DocLedgerException",
    "DocumentNotFoundException",
    "DuplicateDocumentException",
    "IntegrityException",
    "LedgerException",
    "LedgerTimeoutException",
    "LedgerUnavailableException",
    "LedgerWriteException",
    "ValidationException",
]
