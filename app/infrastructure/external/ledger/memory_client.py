"""In-process ledger with the registry contract's rules (development and tests).

State lives for the lifetime of the process. Enforces unique document ids
and unique hashes, stamps uploadDate and uploader at write time, and
returns the zero record for unknown keys like the contract does.
"""

from __future__ import annotations

import asyncio
import dataclasses
import secrets

from app.application.dtos.ledger import LedgerWriteResult
from app.domain.entities.document_record import DocumentRecord
from app.domain.exceptions import LedgerWriteException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import to_timestamp, utc_now

logger = get_logger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

EMPTY_RECORD = DocumentRecord(
    document_id="",
    document_hash="",
    owner_id="",
    owner_name="",
    document_type="",
    issuer_organization="",
    issue_date=0,
    upload_date=0,
    uploader=ZERO_ADDRESS,
    is_valid=False,
)


class InMemoryLedgerClient:
    """ILedgerClient backed by dicts; writes are serialized by a lock."""

    backend = "memory"

    def __init__(self, account: str) -> None:
        self._account = account
        self._records: dict[str, DocumentRecord] = {}
        self._ids_by_hash: dict[str, str] = {}
        self._block_number = 0
        self._lock = asyncio.Lock()

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
        async with self._lock:
            if not document_id or not document_hash:
                raise LedgerWriteException("registerDocument", "Document ID and hash required")
            if document_id in self._records:
                raise LedgerWriteException("registerDocument", "Document ID already exists")
            if document_hash in self._ids_by_hash:
                raise LedgerWriteException(
                    "registerDocument", "Document hash already registered"
                )
            self._records[document_id] = DocumentRecord(
                document_id=document_id,
                document_hash=document_hash,
                owner_id=owner_id,
                owner_name=owner_name,
                document_type=document_type,
                issuer_organization=issuer_organization,
                issue_date=issue_date,
                upload_date=to_timestamp(utc_now()),
                uploader=self._account,
                is_valid=True,
            )
            self._ids_by_hash[document_hash] = document_id
            self._block_number += 1
            return LedgerWriteResult(
                transaction_hash=f"0x{secrets.token_hex(32)}",
                block_number=self._block_number,
            )

    async def get_document(self, document_id: str) -> DocumentRecord:
        return self._records.get(document_id, EMPTY_RECORD)

    async def verify_document_by_id(self, document_id: str) -> DocumentRecord:
        return await self.get_document(document_id)

    async def verify_document_by_hash(self, document_hash: str) -> DocumentRecord:
        document_id = self._ids_by_hash.get(document_hash)
        if document_id is None:
            return EMPTY_RECORD
        return self._records[document_id]

    async def document_exists(self, document_id: str) -> bool:
        return document_id in self._records

    async def hash_already_registered(self, document_hash: str) -> bool:
        return document_hash in self._ids_by_hash

    async def revoke(self, document_id: str) -> None:
        """Mark a record invalid (the issuer-side revocation path)."""
        async with self._lock:
            record = self._records.get(document_id)
            if record is None:
                raise LedgerWriteException("revokeDocument", "Document does not exist")
            self._records[document_id] = dataclasses.replace(record, is_valid=False)
        logger.info("Revoked %s", document_id)

    async def is_connected(self) -> bool:
        return True

    async def account(self) -> str | None:
        return self._account

    async def close(self) -> None:
        return None
