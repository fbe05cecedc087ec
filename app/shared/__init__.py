"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    from_timestamp_utc,
    generate_document_id,
    utc_now,
)

__all__ = [
    "from_timestamp_utc",
    "generate_document_id",
    "utc_now",
]
