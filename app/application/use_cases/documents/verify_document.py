"""Verification by document id or by re-hashing a presented file.

Read-only: never writes to the ledger and never needs the encryption key.
Ledger failures propagate; they are never reported as "not registered".
"""

from __future__ import annotations

import asyncio
from typing import BinaryIO

from app.application.dtos.document import VerificationResult
from app.application.interfaces.services import IContentHasher
from app.application.services.ledger_gateway import LedgerGateway
from app.domain.entities.document_record import DocumentRecord
from app.domain.enums import VerificationReason
from app.domain.exceptions import DocumentNotFoundException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NOT_REGISTERED_MESSAGE = (
    "Document not found in ledger. This document may be forged or not registered."
)
REVOKED_MESSAGE = "Document is registered but has been revoked by its issuer."


def _result_for(record: DocumentRecord) -> VerificationResult:
    if record.is_valid:
        return VerificationResult(
            verified=True, reason=VerificationReason.VERIFIED, document=record
        )
    return VerificationResult(
        verified=False,
        reason=VerificationReason.REVOKED,
        document=record,
        message=REVOKED_MESSAGE,
    )


class DocumentVerificationService:
    """Answers whether a document id or a file matches a valid ledger record."""

    def __init__(self, hasher: IContentHasher, ledger: LedgerGateway) -> None:
        self.hasher = hasher
        self.ledger = ledger

    async def verify_by_id(self, document_id: str) -> VerificationResult:
        """Look up a record by id.

        Raises:
            DocumentNotFoundException: No record under this id.
        """
        if not await self.ledger.exists(document_id):
            raise DocumentNotFoundException("document_id", document_id)
        record = await self.ledger.lookup_by_id(document_id)
        result = _result_for(record)
        logger.info("Verified %s by id: %s", document_id, result.reason.value)
        return result

    async def verify_by_file(self, content: bytes | BinaryIO) -> VerificationResult:
        """Hash the presented bytes and look the hash up; bytes are not kept."""
        if isinstance(content, bytes | bytearray):
            document_hash = await asyncio.to_thread(self.hasher.hash, bytes(content))
        else:
            document_hash = await asyncio.to_thread(self.hasher.hash_stream, content)
        del content

        if not await self.ledger.hash_registered(document_hash):
            logger.info("File hash %s not registered", document_hash)
            return VerificationResult(
                verified=False,
                reason=VerificationReason.NOT_REGISTERED,
                message=NOT_REGISTERED_MESSAGE,
            )
        record = await self.ledger.lookup_by_hash(document_hash)
        result = _result_for(record)
        logger.info(
            "Verified file as %s: %s", record.document_id, result.reason.value
        )
        return result
