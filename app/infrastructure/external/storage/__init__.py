"""Storage: encrypted artifact backends.

Factory creates backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_artifact_store().

Implementations implement IArtifactStore (save, read, delete, exists).
"""

from app.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
