"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_memory_backend_defaults(tmp_path) -> None:
    s = Settings(ledger_backend="memory", storage_root=str(tmp_path))
    assert s.ledger_timeout_seconds > 0
    assert "pdf" in s.allowed_extension_set
    assert "application/pdf" in s.allowed_mime_type_set


def test_web3_requires_contract_address(tmp_path) -> None:
    with pytest.raises(ValidationError, match="LEDGER_CONTRACT_ADDRESS"):
        Settings(
            ledger_backend="web3",
            ledger_contract_address="",
            storage_root=str(tmp_path),
        )


def test_unknown_ledger_backend(tmp_path) -> None:
    with pytest.raises(ValidationError, match="ledger_backend"):
        Settings(ledger_backend="sqlite", storage_root=str(tmp_path))


def test_timeout_must_be_positive(tmp_path) -> None:
    with pytest.raises(ValidationError, match="LEDGER_TIMEOUT_SECONDS"):
        Settings(ledger_timeout_seconds=0, storage_root=str(tmp_path))


def test_extension_list_normalized(tmp_path) -> None:
    s = Settings(allowed_extensions=" .PDF, png ,", storage_root=str(tmp_path))
    assert s.allowed_extension_set == frozenset({"pdf", "png"})


def test_otlp_exporter_requires_endpoint(tmp_path) -> None:
    with pytest.raises(ValidationError, match="TELEMETRY_OTLP_ENDPOINT"):
        Settings(
            telemetry_enabled=True,
            telemetry_exporter="otlp",
            storage_root=str(tmp_path),
        )


def test_exporter_ignored_when_telemetry_disabled(tmp_path) -> None:
    s = Settings(telemetry_enabled=False, telemetry_exporter="jaeger", storage_root=str(tmp_path))
    assert s.telemetry_exporter == "jaeger"
