"""Decrypt an encrypted document artifact with the key from its registration receipt.

Usage:
    uv run python -m scripts.decrypt_document <artifact.enc> <hex-key> [output_path]
Without output_path the plaintext is written next to the artifact with the
.enc suffix removed. Artifacts without a "mac" field are opened in legacy
(unauthenticated) mode.
All imports use app.*.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any

from app.application.services.vault_service import KEY_SIZE, SymmetricVault
from app.domain.exceptions import IntegrityException
from app.infrastructure.exceptions import StorageException
from app.infrastructure.external.storage.local_storage import LocalArtifactStore

USAGE = "Usage: uv run python -m scripts.decrypt_document <artifact.enc> <hex-key> [output_path]"


def _default_output(artifact_path: Path) -> Path:
    if artifact_path.suffix == ".enc":
        return artifact_path.with_suffix("")
    return artifact_path.with_name(artifact_path.name + ".dec")


def _load_artifact(artifact_path: Path) -> dict[str, Any]:
    """Read the sidecar through the artifact store rooted at its directory."""
    store = LocalArtifactStore(str(artifact_path.parent))
    return asyncio.run(store.read(artifact_path.name))


def decrypt_artifact(
    artifact_path: Path, key_hex: str, output_path: Path | None = None
) -> Path:
    """Decrypt artifact_path and write the plaintext. Returns the output path.

    Raises:
        ValueError: Malformed key or artifact.
        IntegrityException: Wrong key or tampered artifact.
        StorageException: Artifact missing or not a JSON object.
        OSError: Output not writable.
    """
    key = bytes.fromhex(key_hex.strip())
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be {KEY_SIZE * 2} hex characters")
    artifact = _load_artifact(artifact_path)
    if "iv" not in artifact or "data" not in artifact:
        raise ValueError("Artifact must be a JSON object with 'iv' and 'data'")

    vault = SymmetricVault()
    nonce = bytes.fromhex(artifact["iv"])
    ciphertext = bytes.fromhex(artifact["data"])
    if "mac" in artifact:
        plaintext = vault.decrypt(key, nonce, ciphertext, bytes.fromhex(artifact["mac"]))
    else:
        plaintext = vault.decrypt_legacy(key, nonce, ciphertext)

    target = output_path or _default_output(artifact_path)
    target.write_bytes(plaintext)
    return target


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1
    artifact_path = Path(args[0])
    output_path = Path(args[2]) if len(args) > 2 else None
    try:
        target = decrypt_artifact(artifact_path, args[1], output_path)
    except (IntegrityException, StorageException) as e:
        return _report_failure(e.message)
    except (ValueError, OSError) as e:
        return _report_failure(str(e))
    print(f"Decrypted to: {target}")
    return 0


def _report_failure(message: str) -> int:
    print(f"Decryption failed: {message}", file=sys.stderr)
    print("Common issues:", file=sys.stderr)
    print("  1. Wrong encryption key", file=sys.stderr)
    print("  2. Corrupted or modified artifact", file=sys.stderr)
    print("  3. Incorrect artifact path", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
