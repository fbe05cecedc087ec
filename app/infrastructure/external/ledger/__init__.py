"""Ledger: clients for the document registry contract.

Factory creates the client from app.core.config. Implementations are loaded
lazily inside LedgerFactory.create_ledger_client() so that:
- Default (memory) has no extra dependencies.
- web3 backend only loads web3 when used; install with the ``ledger`` extra.

Implementations implement ILedgerClient.
"""

from app.infrastructure.external.ledger.factory import LedgerFactory

__all__ = [
    "LedgerFactory",
]
