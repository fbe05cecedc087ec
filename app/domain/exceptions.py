"""Domain exceptions for the document ledger service.

Every failure carries a machine-readable error_code plus a human-readable
message. Presentation layer maps error codes to HTTP responses in
exception handlers; no failure is swallowed into a success response.
"""

from typing import Any


class DocLedgerException(Exception):
    """Base exception for all document ledger errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, document_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serializable error body (error, message, details)."""
        return {
            "success": False,
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DocLedgerException):
    """Raised when input is rejected before any hashing or ledger work (InvalidInput)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DuplicateDocumentException(DocLedgerException):
    """Raised when the document fingerprint is already anchored on the ledger."""

    def __init__(self, document_hash: str) -> None:
        super().__init__(
            "Document already registered",
            "DUPLICATE_DOCUMENT",
            {"document_hash": document_hash},
        )


class DocumentNotFoundException(DocLedgerException):
    """Raised when a document id or hash is absent from the ledger."""

    def __init__(self, lookup: str, value: str) -> None:
        """Initialize with the lookup kind and the missing value.

        Args:
            lookup: 'document_id' or 'document_hash'.
            value: The id or hash that was not found.
        """
        super().__init__(
            "Document not found",
            "DOCUMENT_NOT_FOUND",
            {lookup: value},
        )


class LedgerException(DocLedgerException):
    """Base for ledger infrastructure failures (never means 'not found')."""


class LedgerUnavailableException(LedgerException):
    """Raised when the ledger cannot be reached (no connection, no contract)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Ledger unavailable",
            "LEDGER_UNAVAILABLE",
            {"reason": reason},
        )


class LedgerTimeoutException(LedgerException):
    """Raised when a ledger call exceeds its time budget."""

    def __init__(self, operation: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Ledger call '{operation}' timed out after {timeout_seconds} seconds",
            "LEDGER_TIMEOUT",
            {"operation": operation, "timeout_seconds": timeout_seconds},
        )


class LedgerWriteException(LedgerException):
    """Raised when the ledger rejects or reverts a call (no confirmed receipt)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Ledger rejected '{operation}'",
            "LEDGER_WRITE_ERROR",
            {"operation": operation, "reason": reason},
        )


class CryptoException(DocLedgerException):
    """Raised when the random source or the cipher fails (fatal to the request)."""

    def __init__(self, message: str = "Encryption failed") -> None:
        super().__init__(message, "CRYPTO_ERROR")


class IntegrityException(DocLedgerException):
    """Raised when decryption cannot be authenticated (wrong key or tampered data)."""

    def __init__(
        self,
        message: str = "Decryption failed - wrong key or corrupted ciphertext",
    ) -> None:
        super().__init__(message, "INTEGRITY_ERROR")
