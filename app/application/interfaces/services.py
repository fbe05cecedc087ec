"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from app.application.dtos.document import EncryptionEnvelope


class IContentHasher(Protocol):
    """Protocol for content fingerprinting (same instance for register and verify)."""

    def hash(self, data: bytes) -> str:
        """Lowercase hex digest of data."""
        ...

    def hash_stream(self, file_obj: BinaryIO) -> str:
        """Digest of a binary stream; rewinds it if seekable."""
        ...


class IVault(Protocol):
    """Protocol for per-document symmetric encryption."""

    def encrypt(self, plaintext: bytes) -> EncryptionEnvelope:
        """Encrypt under a fresh key and nonce."""
        ...

    def decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes, mac: bytes) -> bytes:
        """Authenticated decryption. Raises IntegrityException on any mismatch."""
        ...
