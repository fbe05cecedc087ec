"""Tests for Web3LedgerClient error translation and record mapping (needs the ledger extra)."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

pytest.importorskip("web3")
aiohttp = pytest.importorskip("aiohttp")

from app.domain.exceptions import (  # noqa: E402
    LedgerTimeoutException,
    LedgerUnavailableException,
    LedgerWriteException,
)
from app.infrastructure.external.ledger.web3_client import (  # noqa: E402
    Web3LedgerClient,
    _to_record,
)

CONTRACT = "0x" + "11" * 20


def _client_with_failing_call(error: BaseException) -> Web3LedgerClient:
    client = Web3LedgerClient("http://127.0.0.1:7545", CONTRACT, receipt_timeout_seconds=2.0)
    contract = Mock()
    contract.functions.hashAlreadyRegistered.return_value.call = AsyncMock(side_effect=error)
    client._contract = contract
    return client


class TestTransportErrors:
    async def test_server_disconnect_is_unavailable(self) -> None:
        client = _client_with_failing_call(aiohttp.ServerDisconnectedError())
        with pytest.raises(LedgerUnavailableException) as exc_info:
            await client.hash_already_registered("ab" * 32)
        assert "ServerDisconnectedError" in exc_info.value.details["reason"]

    async def test_rpc_5xx_is_unavailable(self) -> None:
        error = aiohttp.ClientResponseError(
            request_info=Mock(), history=(), status=502, message="Bad Gateway"
        )
        client = _client_with_failing_call(error)
        with pytest.raises(LedgerUnavailableException):
            await client.hash_already_registered("ab" * 32)

    async def test_socket_timeout_is_ledger_timeout(self) -> None:
        client = _client_with_failing_call(asyncio.TimeoutError())
        with pytest.raises(LedgerTimeoutException) as exc_info:
            await client.hash_already_registered("ab" * 32)
        assert exc_info.value.details["operation"] == "hashAlreadyRegistered"

    async def test_connection_refused_is_unavailable(self) -> None:
        client = _client_with_failing_call(ConnectionRefusedError("refused"))
        with pytest.raises(LedgerUnavailableException):
            await client.hash_already_registered("ab" * 32)

    async def test_revert_is_write_error(self) -> None:
        from web3.exceptions import ContractLogicError

        client = _client_with_failing_call(ContractLogicError("execution reverted"))
        with pytest.raises(LedgerWriteException):
            await client.hash_already_registered("ab" * 32)


class TestToRecord:
    def test_positional_tuple(self) -> None:
        record = _to_record(
            ("DOC-1", "ab" * 32, "A1", "Jane", "certificate", "Org", 1700000000, 1700000100,
             "0xabc", True)
        )
        assert record.document_id == "DOC-1"
        assert record.upload_date == 1700000100
        assert record.is_valid is True

    def test_zero_record_is_empty(self) -> None:
        record = _to_record(("", "", "", "", "", "", 0, 0, "0x" + "00" * 20, False))
        assert record.is_empty()
