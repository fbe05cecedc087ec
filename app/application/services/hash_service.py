"""Content hashing for document fingerprints (raw bytes + algorithm)."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import BinaryIO


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    name: str

    @abstractmethod
    def new(self) -> hashlib._Hash:
        """Return a fresh incremental hash object."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation (the fingerprint anchored on the ledger)."""

    name = "sha256"

    def new(self) -> hashlib._Hash:
        return hashlib.sha256()


class ContentHasher:
    """Single source of truth for document fingerprints (IContentHasher).

    Registration and verification must share one instance; a file only
    verifies against the digest it was registered with.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    def hash(self, data: bytes) -> str:
        """Lowercase hex digest of data. Pure and deterministic."""
        digest = self.algorithm.new()
        digest.update(data)
        return digest.hexdigest()

    def hash_stream(self, file_obj: BinaryIO) -> str:
        """Hash a binary stream in chunks; rewinds it afterwards if seekable."""
        digest = self.algorithm.new()
        while chunk := file_obj.read(self.CHUNK_SIZE):
            digest.update(chunk)
        if getattr(file_obj, "seekable", None) and file_obj.seekable():
            file_obj.seek(0)
        return digest.hexdigest()
