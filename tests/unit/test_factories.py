"""Tests for LedgerFactory and StorageFactory backend selection."""

import pytest

from app.core.config import Settings
from app.infrastructure.external.ledger import LedgerFactory
from app.infrastructure.external.ledger.memory_client import InMemoryLedgerClient
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.external.storage.local_storage import LocalArtifactStore


def test_memory_ledger_selected(tmp_path) -> None:
    settings = Settings(
        ledger_backend="memory",
        ledger_memory_account="0xabc",
        storage_root=str(tmp_path),
    )
    client = LedgerFactory.create_ledger_client(settings)
    assert isinstance(client, InMemoryLedgerClient)
    assert client.backend == "memory"


async def test_memory_ledger_uses_configured_account(tmp_path) -> None:
    settings = Settings(ledger_memory_account="0xabc", storage_root=str(tmp_path))
    client = LedgerFactory.create_ledger_client(settings)
    assert await client.account() == "0xabc"


def test_unknown_ledger_backend_rejected(tmp_path) -> None:
    settings = Settings(storage_root=str(tmp_path))
    settings.ledger_backend = "fabric"
    with pytest.raises(ValueError, match="Unknown ledger backend"):
        LedgerFactory.create_ledger_client(settings)


def test_local_storage_selected(tmp_path) -> None:
    settings = Settings(storage_root=str(tmp_path / "artifacts"))
    store = StorageFactory.create_artifact_store(settings)
    assert isinstance(store, LocalArtifactStore)
    assert (tmp_path / "artifacts").is_dir()
