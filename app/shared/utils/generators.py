"""ID generators (document identifiers)."""

import secrets
import time

DOCUMENT_ID_PREFIX = "DOC"


def generate_document_id() -> str:
    """Generate a human-typeable document identifier.

    Format: DOC-<unix milliseconds>-<8 uppercase hex>. The millisecond part
    orders IDs within a process; the 32 random bits separate IDs issued in
    the same millisecond. Collisions are not detected here; the ledger
    rejects a write under an existing id.

    Returns:
        A new document ID string.
    """
    millis = time.time_ns() // 1_000_000
    suffix = secrets.token_hex(4).upper()
    return f"{DOCUMENT_ID_PREFIX}-{millis}-{suffix}"

