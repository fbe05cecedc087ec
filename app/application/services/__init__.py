"""Application services: hashing, encryption, upload policy, ledger gateway."""

from app.application.services.hash_service import (
    ContentHasher,
    HashAlgorithm,
    SHA256Algorithm,
)
from app.application.services.ledger_gateway import LedgerGateway
from app.application.services.upload_policy import UploadPolicy
from app.application.services.vault_service import SymmetricVault

__all__ = [
    "ContentHasher",
    "HashAlgorithm",
    "LedgerGateway",
    "SHA256Algorithm",
    "SymmetricVault",
    "UploadPolicy",
]
