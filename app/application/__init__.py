"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (ledger clients, artifact storage).
"""

from app.application.interfaces import (
    IArtifactStore,
    IContentHasher,
    ILedgerClient,
    IVault,
)
from app.application.services import (
    ContentHasher,
    LedgerGateway,
    SymmetricVault,
    UploadPolicy,
)
from app.application.use_cases import (
    DocumentRegistrationService,
    DocumentVerificationService,
)

__all__ = [
    "ContentHasher",
    "DocumentRegistrationService",
    "DocumentVerificationService",
    "IArtifactStore",
    "IContentHasher",
    "ILedgerClient",
    "IVault",
    "LedgerGateway",
    "SymmetricVault",
    "UploadPolicy",
]
