"""Artifact store port (DIP). Implementation: LocalArtifactStore."""

from typing import Any, Protocol


class IArtifactStore(Protocol):
    """Protocol for persisting encrypted document artifacts.

    An artifact is a JSON sidecar ({iv, data, mac, alg}) addressed by a
    storage reference (<document_id>.enc). It never contains the key.
    """

    async def save(self, storage_ref: str, artifact: dict[str, Any]) -> str:
        """Write artifact atomically. Returns the storage reference."""
        ...

    async def read(self, storage_ref: str) -> dict[str, Any]:
        """Load artifact. Raises StorageNotFoundError if missing."""
        ...

    async def delete(self, storage_ref: str) -> bool:
        """Delete artifact. Returns True if deleted, False if not found."""
        ...
