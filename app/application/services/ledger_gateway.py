"""Ledger gateway: the only component that talks to the document registry.

Wraps an injected ILedgerClient with a per-call time budget, maps transport
failures to LedgerUnavailableException and converts the contract's zero
record into DocumentNotFoundException. Calls are never retried.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from app.application.dtos.document import DocumentMetadata
from app.application.dtos.ledger import LedgerHealth, LedgerWriteResult
from app.application.interfaces.ledger import ILedgerClient
from app.domain.entities.document_record import DocumentRecord
from app.domain.exceptions import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    LedgerException,
    LedgerTimeoutException,
    LedgerUnavailableException,
    LedgerWriteException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)

T = TypeVar("T")


class LedgerGateway:
    """Typed, time-bounded access to the ledger (one instance per process)."""

    def __init__(self, client: ILedgerClient, timeout_seconds: float) -> None:
        self._client = client
        self.timeout_seconds = timeout_seconds

    @property
    def backend(self) -> str:
        return self._client.backend

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Await one client call within the time budget and normalize failures."""
        add_span_attributes(operation=operation, backend=self.backend)
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except TimeoutError as e:
            logger.warning(
                "Ledger call %s timed out after %ss", operation, self.timeout_seconds
            )
            raise LedgerTimeoutException(operation, self.timeout_seconds) from e
        except LedgerException:
            raise
        except OSError as e:
            logger.warning("Ledger call %s failed: %s", operation, e)
            raise LedgerUnavailableException(str(e)) from e

    @traced("ledger.exists")
    async def exists(self, document_id: str) -> bool:
        add_span_attributes(document_id=document_id)
        return await self._call("documentExists", self._client.document_exists(document_id))

    @traced("ledger.hash_registered")
    async def hash_registered(self, document_hash: str) -> bool:
        add_span_attributes(document_hash=document_hash)
        return await self._call(
            "hashAlreadyRegistered", self._client.hash_already_registered(document_hash)
        )

    @traced("ledger.register")
    async def register(
        self,
        document_id: str,
        document_hash: str,
        metadata: DocumentMetadata,
    ) -> LedgerWriteResult:
        """Write one record and wait for confirmation.

        A rejected write whose hash turns out to be registered lost a race
        with another writer and is reported as a duplicate.

        Raises:
            DuplicateDocumentException: Hash registered concurrently.
            LedgerWriteException: Reverted or failed transaction.
            LedgerTimeoutException: No receipt within the time budget.
            LedgerUnavailableException: Ledger unreachable.
        """
        add_span_attributes(document_id=document_id, document_hash=document_hash)
        try:
            result = await self._call(
                "registerDocument",
                self._client.register_document(
                    document_id,
                    document_hash,
                    metadata.owner_id,
                    metadata.owner_name,
                    metadata.document_type,
                    metadata.issuer_organization,
                    metadata.issue_date,
                ),
            )
        except LedgerWriteException:
            if await self._registered_concurrently(document_hash):
                logger.info(
                    "Registration of %s rejected: hash registered concurrently",
                    document_id,
                )
                raise DuplicateDocumentException(document_hash) from None
            raise
        logger.info(
            "Registered %s on ledger (tx=%s, block=%s)",
            document_id,
            result.transaction_hash,
            result.block_number,
        )
        return result

    async def _registered_concurrently(self, document_hash: str) -> bool:
        try:
            return await self.hash_registered(document_hash)
        except LedgerException as e:
            logger.warning("Duplicate check after failed write also failed: %s", e.message)
            return False

    @traced("ledger.lookup_by_id")
    async def lookup_by_id(self, document_id: str) -> DocumentRecord:
        """Read-only lookup via getDocument (never the non-view verifyDocumentById)."""
        add_span_attributes(document_id=document_id)
        record = await self._call("getDocument", self._client.get_document(document_id))
        if record.is_empty():
            raise DocumentNotFoundException("document_id", document_id)
        return record

    @traced("ledger.lookup_by_hash")
    async def lookup_by_hash(self, document_hash: str) -> DocumentRecord:
        add_span_attributes(document_hash=document_hash)
        record = await self._call(
            "verifyDocumentByHash", self._client.verify_document_by_hash(document_hash)
        )
        if record.is_empty():
            raise DocumentNotFoundException("document_hash", document_hash)
        return record

    async def health_check(self) -> LedgerHealth:
        """Connectivity snapshot; never raises."""
        try:
            connected = await self._call("isConnected", self._client.is_connected())
            account = await self._call("account", self._client.account()) if connected else None
        except LedgerException as e:
            return LedgerHealth(connected=False, backend=self.backend, message=e.message)
        return LedgerHealth(
            connected=connected,
            backend=self.backend,
            account=account,
            message=None if connected else "Ledger node not reachable",
        )

    async def close(self) -> None:
        await self._client.close()
