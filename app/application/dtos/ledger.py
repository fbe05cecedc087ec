"""DTOs returned by ledger clients and the ledger gateway."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerWriteResult:
    """Confirmed registerDocument transaction."""

    transaction_hash: str
    block_number: int | None = None


@dataclass(frozen=True)
class LedgerHealth:
    """Ledger connectivity snapshot for the health endpoint."""

    connected: bool
    backend: str
    account: str | None = None
    message: str | None = None
