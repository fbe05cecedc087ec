"""Application interfaces (ports): ledger, storage and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.ledger import ILedgerClient
from app.application.interfaces.services import IContentHasher, IVault
from app.application.interfaces.storage import IArtifactStore

__all__ = [
    "IArtifactStore",
    "IContentHasher",
    "ILedgerClient",
    "IVault",
]
