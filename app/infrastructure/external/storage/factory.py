"""Artifact store factory: creates the storage backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.application.interfaces.storage import IArtifactStore
    from app.core.config import Settings


class StorageFactory:
    """Factory for artifact store instances based on configuration."""

    @staticmethod
    def create_artifact_store(settings: "Settings | None" = None) -> "IArtifactStore":
        """Create artifact store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalArtifactStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from app.infrastructure.external.storage.local_storage import (
                LocalArtifactStore,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalArtifactStore(storage_root=s.storage_root)
        raise ValueError(f"Unknown storage backend: {backend}. Supported: 'local'")
