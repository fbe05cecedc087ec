"""UTC helpers for ledger timestamps.

The ledger stores whole seconds since epoch. Convert at the boundary with
these helpers so every datetime in the service is timezone-aware UTC.
"""

from datetime import UTC, datetime

# 9999-12-31T23:59:59Z, the last second datetime can represent.
MAX_TIMESTAMP = 253402300799


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (never datetime.utcnow())."""
    return datetime.now(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """Aware UTC datetime for a Unix timestamp in seconds."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def try_from_timestamp_utc(timestamp: float) -> datetime | None:
    """Like from_timestamp_utc, but None for values datetime cannot represent.

    Ledger records are written by any client of the contract, so a stored
    value (e.g. milliseconds instead of seconds) can be out of range.
    """
    try:
        return from_timestamp_utc(timestamp)
    except (ValueError, OverflowError, OSError):
        return None


def to_timestamp(dt: datetime) -> int:
    """Whole seconds since epoch. Naive values are taken as UTC.

    Args:
        dt: Datetime to convert.

    Returns:
        Integer Unix timestamp, the unit the ledger stores.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
