"""Infrastructure exceptions for artifact storage.

Storage errors extend DocLedgerException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import DocLedgerException


class StorageException(DocLedgerException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """Artifact not found in storage."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"Artifact not found: {storage_ref}",
            "STORAGE_NOT_FOUND",
            {"storage_ref": storage_ref},
        )


class StorageWriteError(StorageException):
    """Artifact write failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to write artifact: {storage_ref}",
            "STORAGE_WRITE_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageReadError(StorageException):
    """Artifact read failed or sidecar is malformed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to read artifact: {storage_ref}",
            "STORAGE_READ_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Artifact deletion failed."""

    def __init__(self, storage_ref: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete artifact: {storage_ref}",
            "STORAGE_DELETE_ERROR",
            {"storage_ref": storage_ref, "reason": reason},
        )


class StorageAlreadyExistsError(StorageException):
    """An artifact already exists under this reference (ids are never reused)."""

    def __init__(self, storage_ref: str) -> None:
        super().__init__(
            f"Artifact already exists: {storage_ref}",
            "STORAGE_EXISTS_ERROR",
            {"storage_ref": storage_ref},
        )


class StoragePermissionError(StorageException):
    """Reference resolves outside the storage root."""

    def __init__(self, storage_ref: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {storage_ref}",
            "STORAGE_PERMISSION_ERROR",
            {"storage_ref": storage_ref, "operation": operation},
        )
