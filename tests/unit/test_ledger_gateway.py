"""Tests for LedgerGateway (timeouts, failure mapping, duplicate reconcile)."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.document import DocumentMetadata
from app.application.dtos.ledger import LedgerWriteResult
from app.application.services.ledger_gateway import LedgerGateway
from app.domain.exceptions import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    LedgerTimeoutException,
    LedgerUnavailableException,
    LedgerWriteException,
)
from app.infrastructure.external.ledger.memory_client import (
    EMPTY_RECORD,
    InMemoryLedgerClient,
)

HASH = "a" * 64


def _mock_client() -> AsyncMock:
    client = AsyncMock()
    client.backend = "mock"
    return client


class TestTimeoutsAndTransport:
    """Every call is bounded; transport errors are 'unavailable', never 'not found'."""

    async def test_slow_call_raises_timeout(self) -> None:
        client = _mock_client()

        async def slow(_: str) -> bool:
            await asyncio.sleep(1)
            return True

        client.hash_already_registered.side_effect = slow
        gateway = LedgerGateway(client, timeout_seconds=0.05)
        with pytest.raises(LedgerTimeoutException) as exc_info:
            await gateway.hash_registered(HASH)
        assert exc_info.value.details["operation"] == "hashAlreadyRegistered"

    async def test_connection_error_raises_unavailable(self) -> None:
        client = _mock_client()
        client.document_exists.side_effect = ConnectionRefusedError("refused")
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(LedgerUnavailableException):
            await gateway.exists("DOC-1")

    async def test_ledger_exceptions_pass_through(self) -> None:
        client = _mock_client()
        client.get_document.side_effect = LedgerUnavailableException("down")
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(LedgerUnavailableException):
            await gateway.lookup_by_id("DOC-1")


class TestRegister:
    async def test_success_returns_write_result(
        self, gateway: LedgerGateway, metadata: DocumentMetadata
    ) -> None:
        result = await gateway.register("DOC-1", HASH, metadata)
        assert result.transaction_hash.startswith("0x")
        assert await gateway.exists("DOC-1")
        assert await gateway.hash_registered(HASH)

    async def test_rejected_write_with_registered_hash_is_duplicate(
        self, metadata: DocumentMetadata
    ) -> None:
        client = _mock_client()
        client.register_document.side_effect = LedgerWriteException(
            "registerDocument", "Document hash already registered"
        )
        client.hash_already_registered.return_value = True
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(DuplicateDocumentException):
            await gateway.register("DOC-1", HASH, metadata)

    async def test_rejected_write_without_registered_hash_reraises(
        self, metadata: DocumentMetadata
    ) -> None:
        client = _mock_client()
        client.register_document.side_effect = LedgerWriteException(
            "registerDocument", "out of gas"
        )
        client.hash_already_registered.return_value = False
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(LedgerWriteException):
            await gateway.register("DOC-1", HASH, metadata)

    async def test_reconcile_failure_keeps_original_error(
        self, metadata: DocumentMetadata
    ) -> None:
        client = _mock_client()
        client.register_document.side_effect = LedgerWriteException(
            "registerDocument", "reverted"
        )
        client.hash_already_registered.side_effect = LedgerUnavailableException("down")
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(LedgerWriteException):
            await gateway.register("DOC-1", HASH, metadata)

    async def test_passes_metadata_in_contract_order(
        self, metadata: DocumentMetadata
    ) -> None:
        client = _mock_client()
        client.register_document.return_value = LedgerWriteResult("0xabc", 7)
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        await gateway.register("DOC-1", HASH, metadata)
        client.register_document.assert_awaited_once_with(
            "DOC-1", HASH, "A1", "Jane", "certificate", "Org", 1700000000
        )


class TestLookups:
    async def test_lookup_by_id_zero_record_is_not_found(self) -> None:
        client = _mock_client()
        client.get_document.return_value = EMPTY_RECORD
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(DocumentNotFoundException) as exc_info:
            await gateway.lookup_by_id("DOC-missing")
        assert exc_info.value.details == {"document_id": "DOC-missing"}

    async def test_lookup_by_hash_zero_record_is_not_found(
        self, gateway: LedgerGateway
    ) -> None:
        with pytest.raises(DocumentNotFoundException):
            await gateway.lookup_by_hash(HASH)

    async def test_lookup_by_id_uses_get_document_not_verify(self) -> None:
        client = _mock_client()
        client.get_document.return_value = EMPTY_RECORD
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        with pytest.raises(DocumentNotFoundException):
            await gateway.lookup_by_id("DOC-1")
        client.get_document.assert_awaited_once_with("DOC-1")
        client.verify_document_by_id.assert_not_awaited()

    async def test_lookup_returns_record(
        self, gateway: LedgerGateway, metadata: DocumentMetadata
    ) -> None:
        await gateway.register("DOC-1", HASH, metadata)
        by_id = await gateway.lookup_by_id("DOC-1")
        by_hash = await gateway.lookup_by_hash(HASH)
        assert by_id == by_hash
        assert by_id.owner_name == "Jane"
        assert by_id.is_valid is True


class TestHealthCheck:
    async def test_connected(self, gateway: LedgerGateway) -> None:
        health = await gateway.health_check()
        assert health.connected is True
        assert health.backend == "memory"
        assert health.account

    async def test_unavailable_is_reported_not_raised(self) -> None:
        client = _mock_client()
        client.is_connected.side_effect = LedgerUnavailableException("down")
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        health = await gateway.health_check()
        assert health.connected is False
        assert health.message == "Ledger unavailable"

    async def test_disconnected_node(self) -> None:
        client = _mock_client()
        client.is_connected.return_value = False
        gateway = LedgerGateway(client, timeout_seconds=1.0)
        health = await gateway.health_check()
        assert health.connected is False
        assert health.account is None
        client.account.assert_not_awaited()


async def test_close_closes_client() -> None:
    client = InMemoryLedgerClient(account="0x1")
    gateway = LedgerGateway(client, timeout_seconds=1.0)
    await gateway.close()
