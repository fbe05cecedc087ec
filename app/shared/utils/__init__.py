"""Shared utilities: UTC timestamps and document id generation."""

from app.shared.utils.datetime import (
    MAX_TIMESTAMP,
    from_timestamp_utc,
    to_timestamp,
    try_from_timestamp_utc,
    utc_now,
)
from app.shared.utils.generators import generate_document_id

__all__ = [
    "MAX_TIMESTAMP",
    "from_timestamp_utc",
    "generate_document_id",
    "to_timestamp",
    "try_from_timestamp_utc",
    "utc_now",
]
