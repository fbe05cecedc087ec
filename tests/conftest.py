"""Pytest configuration and fixtures for docledger.

Uses app.main:app for HTTP tests with the in-memory ledger and a temporary
artifact root. Environment is set before app.main is imported because the
app is built at import time. All imports use app.*.
"""

import os
import tempfile

os.environ["LEDGER_BACKEND"] = "memory"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="docledger-test-")
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["VERIFICATION_BASE_URL"] = "http://localhost:3000/verify"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.application.dtos.document import DocumentMetadata  # noqa: E402
from app.application.services.hash_service import ContentHasher  # noqa: E402
from app.application.services.ledger_gateway import LedgerGateway  # noqa: E402
from app.application.services.upload_policy import UploadPolicy  # noqa: E402
from app.application.services.vault_service import SymmetricVault  # noqa: E402
from app.application.use_cases.documents import (  # noqa: E402
    DocumentRegistrationService,
    DocumentVerificationService,
)
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.external.ledger.memory_client import (  # noqa: E402
    InMemoryLedgerClient,
)
from app.infrastructure.external.storage.local_storage import (  # noqa: E402
    LocalArtifactStore,
)

get_settings.cache_clear()

from app.main import app  # noqa: E402

limiter.enabled = False

TEST_ACCOUNT = "0x00000000000000000000000000000000000000aa"
PDF_MIME = "application/pdf"


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), with lifespan run.

    Each test gets a fresh in-memory ledger.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
def ledger_client() -> InMemoryLedgerClient:
    return InMemoryLedgerClient(account=TEST_ACCOUNT)


@pytest.fixture
def gateway(ledger_client: InMemoryLedgerClient) -> LedgerGateway:
    return LedgerGateway(ledger_client, timeout_seconds=1.0)


@pytest.fixture
def artifact_store(tmp_path) -> LocalArtifactStore:
    return LocalArtifactStore(str(tmp_path / "artifacts"))


@pytest.fixture
def hasher() -> ContentHasher:
    return ContentHasher()


@pytest.fixture
def upload_policy() -> UploadPolicy:
    return UploadPolicy(
        max_upload_size=1024 * 1024,
        allowed_extensions=frozenset({"pdf", "jpg", "jpeg", "png", "doc", "docx"}),
        allowed_mime_types=frozenset({"application/pdf", "image/jpeg", "image/png"}),
    )


@pytest.fixture
def metadata() -> DocumentMetadata:
    return DocumentMetadata(
        owner_id="A1",
        owner_name="Jane",
        document_type="certificate",
        issuer_organization="Org",
        issue_date=1700000000,
    )


@pytest.fixture
def registration_service(
    hasher: ContentHasher,
    gateway: LedgerGateway,
    artifact_store: LocalArtifactStore,
    upload_policy: UploadPolicy,
) -> DocumentRegistrationService:
    return DocumentRegistrationService(
        hasher=hasher,
        vault=SymmetricVault(),
        ledger=gateway,
        artifact_store=artifact_store,
        upload_policy=upload_policy,
        verification_base_url="http://localhost:3000/verify",
    )


@pytest.fixture
def verification_service(
    hasher: ContentHasher, gateway: LedgerGateway
) -> DocumentVerificationService:
    return DocumentVerificationService(hasher=hasher, ledger=gateway)
