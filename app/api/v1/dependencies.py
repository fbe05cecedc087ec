"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the application use cases. Shared
infrastructure (ledger gateway, artifact store) is created once in the
lifespan and read from app.state; everything else is request-scoped.
Routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces.storage import IArtifactStore
from app.application.services.hash_service import ContentHasher
from app.application.services.ledger_gateway import LedgerGateway
from app.application.services.upload_policy import UploadPolicy
from app.application.services.vault_service import SymmetricVault
from app.application.use_cases.documents import (
    DocumentRegistrationService,
    DocumentVerificationService,
)
from app.core.config import Settings, get_settings
from app.domain.exceptions import LedgerUnavailableException

# Registration and verification must fingerprint with the same hasher.
_content_hasher = ContentHasher()


def get_content_hasher() -> ContentHasher:
    return _content_hasher


def get_ledger_gateway(request: Request) -> LedgerGateway:
    """Shared gateway from app.state (set in lifespan)."""
    gateway = getattr(request.app.state, "ledger_gateway", None)
    if gateway is None:
        raise LedgerUnavailableException("Ledger client not initialized")
    return gateway


def get_artifact_store(request: Request) -> IArtifactStore:
    store = getattr(request.app.state, "artifact_store", None)
    if store is None:
        from app.infrastructure.external.storage import StorageFactory

        store = StorageFactory.create_artifact_store(get_settings())
        request.app.state.artifact_store = store
    return store


def get_upload_policy(
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadPolicy:
    return UploadPolicy(
        max_upload_size=settings.max_upload_size,
        allowed_extensions=settings.allowed_extension_set,
        allowed_mime_types=settings.allowed_mime_type_set,
    )


def get_registration_service(
    settings: Annotated[Settings, Depends(get_settings)],
    hasher: Annotated[ContentHasher, Depends(get_content_hasher)],
    ledger: Annotated[LedgerGateway, Depends(get_ledger_gateway)],
    artifact_store: Annotated[IArtifactStore, Depends(get_artifact_store)],
    upload_policy: Annotated[UploadPolicy, Depends(get_upload_policy)],
) -> DocumentRegistrationService:
    return DocumentRegistrationService(
        hasher=hasher,
        vault=SymmetricVault(),
        ledger=ledger,
        artifact_store=artifact_store,
        upload_policy=upload_policy,
        verification_base_url=settings.verification_base_url,
    )


def get_verification_service(
    hasher: Annotated[ContentHasher, Depends(get_content_hasher)],
    ledger: Annotated[LedgerGateway, Depends(get_ledger_gateway)],
) -> DocumentVerificationService:
    return DocumentVerificationService(hasher=hasher, ledger=ledger)
