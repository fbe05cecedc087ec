"""Registration pipeline: validate, hash, dedup, encrypt, persist, anchor.

Stages: RECEIVED -> HASHED -> DEDUP_CHECKED -> ENCRYPTED -> LEDGER_WRITTEN
-> COMPLETE. Any failure exits to REJECTED; the last stage reached is
recorded in the error details under "stage".
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from typing import Any, BinaryIO

from app.application.dtos.document import (
    DocumentMetadata,
    EncryptionEnvelope,
    RegistrationReceipt,
)
from app.application.interfaces.services import IContentHasher, IVault
from app.application.interfaces.storage import IArtifactStore
from app.application.services.ledger_gateway import LedgerGateway
from app.application.services.upload_policy import UploadPolicy
from app.application.services.vault_service import ALGORITHM_ID
from app.domain.enums import RegistrationStage
from app.domain.exceptions import DocLedgerException, DuplicateDocumentException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.generators import generate_document_id

logger = get_logger(__name__)


def build_artifact(envelope: EncryptionEnvelope) -> dict[str, Any]:
    """Artifact sidecar: hex iv/data/mac plus algorithm id. Never holds the key."""
    return {
        "iv": envelope.nonce.hex(),
        "data": envelope.ciphertext.hex(),
        "mac": envelope.mac.hex(),
        "alg": ALGORITHM_ID,
    }


def _read_content(content: bytes | BinaryIO) -> bytes:
    if isinstance(content, bytes | bytearray):
        return bytes(content)
    if getattr(content, "seekable", None) and content.seekable():
        content.seek(0)
    return content.read()


class DocumentRegistrationService:
    """Registers one document per call. Request-scoped; shares only the gateway."""

    def __init__(
        self,
        hasher: IContentHasher,
        vault: IVault,
        ledger: LedgerGateway,
        artifact_store: IArtifactStore,
        upload_policy: UploadPolicy,
        verification_base_url: str,
        id_generator: Callable[[], str] = generate_document_id,
    ) -> None:
        self.hasher = hasher
        self.vault = vault
        self.ledger = ledger
        self.artifacts = artifact_store
        self.policy = upload_policy
        self.verification_base_url = verification_base_url.rstrip("/")
        self._generate_id = id_generator

    def verification_url(self, document_id: str) -> str:
        return f"{self.verification_base_url}/{document_id}"

    async def register(
        self,
        content: bytes | BinaryIO,
        filename: str | None,
        mime_type: str | None,
        metadata: DocumentMetadata,
    ) -> RegistrationReceipt:
        """Run the pipeline and return the receipt (the key is surfaced only here).

        Raises:
            ValidationException: Rejected before hashing.
            DuplicateDocumentException: Hash already on the ledger.
            CryptoException: Encryption failed.
            StorageException: Artifact could not be written.
            LedgerException: Ledger write failed; the artifact is removed.
        """
        stage = RegistrationStage.RECEIVED
        try:
            data = await asyncio.to_thread(_read_content, content)
            safe_name = self.policy.validate_file(filename, mime_type, len(data))
            self.policy.validate_metadata(metadata)

            document_hash = await asyncio.to_thread(self.hasher.hash, data)
            stage = RegistrationStage.HASHED

            if await self.ledger.hash_registered(document_hash):
                raise DuplicateDocumentException(document_hash)
            stage = RegistrationStage.DEDUP_CHECKED

            document_id = self._generate_id()
            envelope = await asyncio.to_thread(self.vault.encrypt, data)
            del data
            ext = os.path.splitext(safe_name)[1].lower()
            artifact_ref = await self.artifacts.save(
                f"{document_id}{ext}.enc", build_artifact(envelope)
            )
            stage = RegistrationStage.ENCRYPTED

            try:
                written = await self.ledger.register(document_id, document_hash, metadata)
            except BaseException:
                # Also on cancellation (request timeout, client disconnect).
                await self._discard_artifact(artifact_ref)
                raise
            stage = RegistrationStage.LEDGER_WRITTEN

            receipt = RegistrationReceipt(
                document_id=document_id,
                document_hash=document_hash,
                encryption_key=envelope.key.hex(),
                transaction_hash=written.transaction_hash,
                artifact_ref=artifact_ref,
                verification_url=self.verification_url(document_id),
            )
            stage = RegistrationStage.COMPLETE
        except DocLedgerException as e:
            e.details.setdefault("stage", stage.value)
            logger.info(
                "Registration %s after stage %s: %s",
                RegistrationStage.REJECTED.value,
                stage.value,
                e.error_code,
            )
            raise
        logger.info("Registration %s: %s", stage.value, document_id)
        return receipt

    async def _discard_artifact(self, artifact_ref: str) -> None:
        """Best-effort cleanup after a failed ledger write."""
        try:
            await self.artifacts.delete(artifact_ref)
        except DocLedgerException as e:
            logger.warning("Could not remove artifact %s: %s", artifact_ref, e.message)
