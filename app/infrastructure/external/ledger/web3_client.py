"""Ledger client for an EVM node over HTTP JSON-RPC (web3.py).

Requires the optional ``web3`` dependency; loaded lazily by LedgerFactory.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3Exception,
)

from app.application.dtos.ledger import LedgerWriteResult
from app.domain.entities.document_record import DocumentRecord
from app.domain.exceptions import (
    LedgerTimeoutException,
    LedgerUnavailableException,
    LedgerWriteException,
)
from app.infrastructure.external.ledger.contract_abi import (
    DOCUMENT_RECORD_FIELDS,
    DOCUMENT_REGISTRY_ABI,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _to_record(raw: Sequence[Any] | dict[str, Any]) -> DocumentRecord:
    """Map the contract's Document tuple (positional or named) to a DocumentRecord."""
    if isinstance(raw, dict):
        values = [raw[name] for name, _ in DOCUMENT_RECORD_FIELDS]
    else:
        values = list(raw)
    (
        document_id,
        document_hash,
        owner_id,
        owner_name,
        document_type,
        issuer_organization,
        issue_date,
        upload_date,
        uploader,
        is_valid,
    ) = values
    return DocumentRecord(
        document_id=document_id,
        document_hash=document_hash,
        owner_id=owner_id,
        owner_name=owner_name,
        document_type=document_type,
        issuer_organization=issuer_organization,
        issue_date=int(issue_date),
        upload_date=int(upload_date),
        uploader=str(uploader),
        is_valid=bool(is_valid),
    )


class Web3LedgerClient:
    """ILedgerClient for the DocumentVerification contract.

    Writes are sent from sender_account (first node account when empty) and
    wait for the receipt; a receipt with status 0 is a rejected write.
    """

    backend = "web3"

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        sender_account: str = "",
        gas_limit: int = 500_000,
        receipt_timeout_seconds: float = 30.0,
    ) -> None:
        self._w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self._contract_address = AsyncWeb3.to_checksum_address(contract_address)
        self._contract = self._w3.eth.contract(
            address=self._contract_address, abi=DOCUMENT_REGISTRY_ABI
        )
        self._sender = (
            AsyncWeb3.to_checksum_address(sender_account) if sender_account else None
        )
        self._gas_limit = gas_limit
        self._receipt_timeout = receipt_timeout_seconds
        self.rpc_url = rpc_url

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Map web3 and transport (aiohttp, socket) errors to ledger exceptions."""
        try:
            yield
        except ContractLogicError as e:
            raise LedgerWriteException(operation, str(e)) from e
        except BadFunctionCallOutput as e:
            raise LedgerUnavailableException(
                f"No registry contract at {self._contract_address}"
            ) from e
        except TimeExhausted as e:
            raise LedgerTimeoutException(operation, self._receipt_timeout) from e
        except Web3Exception as e:
            raise LedgerWriteException(operation, str(e)) from e
        except TimeoutError as e:
            # aiohttp socket timeouts (ServerTimeoutError is also a ClientError).
            raise LedgerTimeoutException(operation, self._receipt_timeout) from e
        except aiohttp.ClientError as e:
            # Disconnects and non-2xx RPC responses are not OSError subclasses.
            raise LedgerUnavailableException(f"{type(e).__name__}: {e}") from e
        except OSError as e:
            raise LedgerUnavailableException(str(e)) from e

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
        sender = await self.account()
        if sender is None:
            raise LedgerUnavailableException("No sender account available on node")
        with self._translate_errors("registerDocument"):
            tx_hash = await self._contract.functions.registerDocument(
                document_id,
                document_hash,
                owner_id,
                owner_name,
                document_type,
                issuer_organization,
                issue_date,
            ).transact({"from": sender, "gas": self._gas_limit})
            receipt = await self._w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._receipt_timeout
            )
        transaction_hash = AsyncWeb3.to_hex(tx_hash)
        if receipt["status"] != 1:
            raise LedgerWriteException(
                "registerDocument", f"transaction {transaction_hash} reverted"
            )
        return LedgerWriteResult(
            transaction_hash=transaction_hash,
            block_number=receipt.get("blockNumber"),
        )

    async def get_document(self, document_id: str) -> DocumentRecord:
        with self._translate_errors("getDocument"):
            raw = await self._contract.functions.getDocument(document_id).call()
        return _to_record(raw)

    async def verify_document_by_id(self, document_id: str) -> DocumentRecord:
        with self._translate_errors("verifyDocumentById"):
            raw = await self._contract.functions.verifyDocumentById(document_id).call()
        return _to_record(raw)

    async def verify_document_by_hash(self, document_hash: str) -> DocumentRecord:
        with self._translate_errors("verifyDocumentByHash"):
            raw = await self._contract.functions.verifyDocumentByHash(document_hash).call()
        return _to_record(raw)

    async def document_exists(self, document_id: str) -> bool:
        with self._translate_errors("documentExists"):
            return bool(await self._contract.functions.documentExists(document_id).call())

    async def hash_already_registered(self, document_hash: str) -> bool:
        with self._translate_errors("hashAlreadyRegistered"):
            return bool(
                await self._contract.functions.hashAlreadyRegistered(document_hash).call()
            )

    async def is_connected(self) -> bool:
        """True when the node answers and code is deployed at the contract address."""
        try:
            if not await self._w3.is_connected():
                return False
            code = await self._w3.eth.get_code(self._contract_address)
        except (Web3Exception, aiohttp.ClientError, OSError) as e:
            logger.warning("Ledger node check failed: %s", e)
            return False
        return len(code) > 0

    async def account(self) -> str | None:
        if self._sender is None:
            with self._translate_errors("eth_accounts"):
                accounts = await self._w3.eth.accounts
            if accounts:
                self._sender = accounts[0]
                logger.info("Using node account %s as ledger sender", self._sender)
        return self._sender

    async def close(self) -> None:
        await self._w3.provider.disconnect()
