"""Tests for InMemoryLedgerClient (contract rules enforced in-process)."""

import pytest

from app.domain.exceptions import LedgerWriteException
from app.infrastructure.external.ledger.memory_client import InMemoryLedgerClient

ACCOUNT = "0x00000000000000000000000000000000000000aa"


async def _register(client: InMemoryLedgerClient, doc_id: str, doc_hash: str):
    return await client.register_document(
        doc_id, doc_hash, "A1", "Jane", "certificate", "Org", 1700000000
    )


class TestRegisterDocument:
    async def test_stamps_uploader_and_upload_date(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        await _register(client, "DOC-1", "h1")
        record = await client.get_document("DOC-1")
        assert record.uploader == ACCOUNT
        assert record.upload_date > 1700000000
        assert record.issue_date == 1700000000
        assert record.is_valid is True

    async def test_distinct_transaction_hashes_and_increasing_blocks(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        a = await _register(client, "DOC-1", "h1")
        b = await _register(client, "DOC-2", "h2")
        assert a.transaction_hash != b.transaction_hash
        assert len(a.transaction_hash) == 66
        assert b.block_number > a.block_number

    async def test_duplicate_id_rejected(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        await _register(client, "DOC-1", "h1")
        with pytest.raises(LedgerWriteException, match="rejected"):
            await _register(client, "DOC-1", "h2")

    async def test_duplicate_hash_rejected(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        await _register(client, "DOC-1", "h1")
        with pytest.raises(LedgerWriteException) as exc_info:
            await _register(client, "DOC-2", "h1")
        assert exc_info.value.details["reason"] == "Document hash already registered"
        assert not await client.document_exists("DOC-2")


class TestReads:
    async def test_unknown_keys_return_zero_record(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        assert (await client.get_document("nope")).is_empty()
        assert (await client.verify_document_by_hash("nope")).is_empty()
        assert not await client.document_exists("nope")
        assert not await client.hash_already_registered("nope")

    async def test_verify_by_hash_finds_record(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        await _register(client, "DOC-1", "h1")
        record = await client.verify_document_by_hash("h1")
        assert record.document_id == "DOC-1"


class TestRevoke:
    async def test_revoke_marks_invalid(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        await _register(client, "DOC-1", "h1")
        await client.revoke("DOC-1")
        assert (await client.get_document("DOC-1")).is_valid is False
        assert await client.hash_already_registered("h1")

    async def test_revoke_unknown_raises(self) -> None:
        client = InMemoryLedgerClient(account=ACCOUNT)
        with pytest.raises(LedgerWriteException):
            await client.revoke("DOC-missing")
