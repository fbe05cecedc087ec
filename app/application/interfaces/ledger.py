"""Ledger client port (DIP). Implementations: Web3LedgerClient, InMemoryLedgerClient.

Methods mirror the DocumentVerification contract one-to-one. Reads of
unknown keys return the contract's zero record (empty document_id); the
gateway turns that into DocumentNotFoundException.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.ledger import LedgerWriteResult
    from app.domain.entities.document_record import DocumentRecord


class ILedgerClient(Protocol):
    """Protocol for a connection to the document registry contract."""

    backend: str

    async def register_document(
        self,
        document_id: str,
        document_hash: str,
        owner_id: str,
        owner_name: str,
        document_type: str,
        issuer_organization: str,
        issue_date: int,
    ) -> LedgerWriteResult:
        """Submit registerDocument and wait for a confirmed receipt."""
        ...

    async def get_document(self, document_id: str) -> DocumentRecord:
        """Read-only lookup by id (getDocument)."""
        ...

    async def verify_document_by_id(self, document_id: str) -> DocumentRecord:
        """Contract's verifyDocumentById (declared non-view; not used for lookups)."""
        ...

    async def verify_document_by_hash(self, document_hash: str) -> DocumentRecord:
        """Read-only lookup by content hash."""
        ...

    async def document_exists(self, document_id: str) -> bool:
        ...

    async def hash_already_registered(self, document_hash: str) -> bool:
        ...

    async def is_connected(self) -> bool:
        """Return True if the node answers and the contract is reachable."""
        ...

    async def account(self) -> str | None:
        """Account used as sender for writes."""
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...
