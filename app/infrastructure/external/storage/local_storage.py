"""Local filesystem artifact store with path validation and atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, cast

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageAlreadyExistsError,
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageReadError,
    StorageWriteError,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LocalArtifactStore:
    """Encrypted artifacts as JSON files under storage_root (IArtifactStore).

    One file per artifact, named by its storage_ref. References that
    resolve outside storage_root are refused. Artifacts are write-once.
    """

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _resolve(self, storage_ref: str) -> Path:
        """Absolute path for storage_ref; must lie strictly inside storage_root."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        if full_path == self.storage_root:
            raise StoragePermissionError(storage_ref, "path_validation")
        return full_path

    async def save(self, storage_ref: str, artifact: dict[str, Any]) -> str:
        """Write artifact JSON and publish it under storage_ref. Returns storage_ref.

        The JSON is written to a private temp file first and then hard-linked
        to its final name, so readers never see a partial artifact and a
        concurrent writer cannot replace an existing one.

        Raises:
            StorageAlreadyExistsError: Something is already stored under storage_ref.
            StorageWriteError: The filesystem refused the write.
        """
        target_path = self._resolve(storage_ref)
        if target_path.exists():
            raise StorageAlreadyExistsError(storage_ref)
        payload = json.dumps(artifact, separators=(",", ":"))
        temp_path: str | None = None
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            fd, temp_path = tempfile.mkstemp(dir=target_path.parent, prefix=".partial-")
            os.close(fd)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
                await f.flush()
            os.chmod(temp_path, 0o640)
            os.link(temp_path, target_path)
        except FileExistsError as e:
            raise StorageAlreadyExistsError(storage_ref) from e
        except OSError as e:
            raise StorageWriteError(storage_ref, str(e)) from e
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
        logger.debug("Stored artifact %s (%d bytes)", storage_ref, len(payload))
        return storage_ref

    async def read(self, storage_ref: str) -> dict[str, Any]:
        file_path = self._resolve(storage_ref)
        if not file_path.exists():
            raise StorageNotFoundError(storage_ref)
        try:
            async with aiofiles.open(file_path, "r") as f:
                result = json.loads(await f.read())
        except (OSError, json.JSONDecodeError) as e:
            raise StorageReadError(storage_ref, str(e)) from e
        if not isinstance(result, dict):
            raise StorageReadError(storage_ref, "artifact is not a JSON object")
        return cast(dict[str, Any], result)

    async def delete(self, storage_ref: str) -> bool:
        """Delete artifact. Returns True if deleted."""
        file_path = self._resolve(storage_ref)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(storage_ref, str(e)) from e
        logger.debug("Deleted artifact %s", storage_ref)
        return True
