"""Ledger client factory: creates the in-memory or web3 client from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.application.interfaces.ledger import ILedgerClient
    from app.core.config import Settings


class LedgerFactory:
    """Factory for ledger client instances based on configuration."""

    @staticmethod
    def create_ledger_client(settings: "Settings | None" = None) -> "ILedgerClient":
        """Create ledger client from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            InMemoryLedgerClient or Web3LedgerClient.

        Raises:
            ValueError: Unknown backend or web3 not installed.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.ledger_backend.lower()

        if backend == "memory":
            from app.infrastructure.external.ledger.memory_client import (
                InMemoryLedgerClient,
            )

            return InMemoryLedgerClient(account=s.ledger_memory_account)
        if backend == "web3":
            if not s.ledger_contract_address:
                raise ValueError("LEDGER_CONTRACT_ADDRESS required for web3 backend")
            try:
                from app.infrastructure.external.ledger.web3_client import (
                    Web3LedgerClient,
                )
            except ImportError as e:
                raise ValueError(
                    "web3 backend requires web3. Install with: pip install 'docledger[ledger]'"
                ) from e
            return Web3LedgerClient(
                rpc_url=s.ledger_rpc_url,
                contract_address=s.ledger_contract_address,
                sender_account=s.ledger_sender_account,
                gas_limit=s.ledger_gas_limit,
                receipt_timeout_seconds=s.ledger_timeout_seconds,
            )
        raise ValueError(
            f"Unknown ledger backend: {backend}. Supported: 'memory', 'web3'"
        )
