"""Upload admission rules: size limit, file type allow-list, required metadata.

Runs before any hashing so rejected uploads never reach the vault or the ledger.
"""

from __future__ import annotations

import os

from app.application.dtos.document import DocumentMetadata
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import MAX_TIMESTAMP

_REQUIRED_TEXT_FIELDS = (
    "owner_id",
    "owner_name",
    "document_type",
    "issuer_organization",
)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    return name.replace("\x00", "").strip(". ")


class UploadPolicy:
    """Validates one upload against configured limits (InvalidInput on failure)."""

    def __init__(
        self,
        max_upload_size: int,
        allowed_extensions: frozenset[str],
        allowed_mime_types: frozenset[str],
    ) -> None:
        self.max_upload_size = max_upload_size
        self.allowed_extensions = allowed_extensions
        self.allowed_mime_types = allowed_mime_types

    def validate_file(self, filename: str | None, mime_type: str | None, size: int) -> str:
        """Check name, type and size. Returns the sanitized filename.

        Both extension and MIME type must be allowed; either alone is not enough.
        """
        if size <= 0:
            raise ValidationException("No file uploaded", field="document")
        if size > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum size of {self.max_upload_size} bytes",
                field="document",
            )
        name = _sanitize_filename(filename or "")
        if not name:
            raise ValidationException("Filename is empty or invalid", field="document")
        ext = os.path.splitext(name)[1].lower().lstrip(".")
        mime = (mime_type or "").split(";")[0].strip().lower()
        if ext not in self.allowed_extensions or mime not in self.allowed_mime_types:
            raise ValidationException("Invalid file type", field="document")
        return name

    def validate_metadata(self, metadata: DocumentMetadata) -> None:
        """All fields required; text fields non-blank; issue_date in seconds since epoch.

        issue_date must be an int in [0, MAX_TIMESTAMP]; a millisecond value would
        be anchored permanently and could never be shown as a date.
        """
        for field in _REQUIRED_TEXT_FIELDS:
            value = getattr(metadata, field)
            if not isinstance(value, str) or not value.strip():
                raise ValidationException(f"{field} is required", field=field)
        issue_date = metadata.issue_date
        if isinstance(issue_date, bool) or not isinstance(issue_date, int) or issue_date < 0:
            raise ValidationException(
                "issue_date must be a non-negative integer timestamp",
                field="issue_date",
            )
        if issue_date > MAX_TIMESTAMP:
            raise ValidationException(
                f"issue_date must be seconds since epoch (at most {MAX_TIMESTAMP})",
                field="issue_date",
            )
