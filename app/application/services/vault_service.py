"""Per-document symmetric encryption (AES-256-CBC + HMAC-SHA256, encrypt-then-MAC).

Every document gets its own random 256-bit key. Two subkeys are derived
from it with HKDF: one for the block cipher, one for the MAC. The MAC
covers nonce || ciphertext and is checked before any decryption.

Artifact sidecars written without a MAC (raw key used directly for CBC)
can still be opened with decrypt_legacy.
"""

from __future__ import annotations

import hashlib
import hmac
import os

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from app.application.dtos.document import EncryptionEnvelope
from app.domain.exceptions import CryptoException, IntegrityException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 16
MAC_SIZE = 32
ALGORITHM_ID = "aes-256-cbc+hmac-sha256"

# Domain-separation contexts for subkey derivation.
_ENC_KEY_INFO = b"docledger-artifact-encryption"
_MAC_KEY_INFO = b"docledger-artifact-authentication"


def _derive_subkey(key: bytes, info: bytes) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=None,
        info=info,
    )
    return hkdf.derive(key)


def _cbc_encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(nonce)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def _cbc_decrypt(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """Decrypt and unpad. ValueError on bad padding or block length."""
    decryptor = Cipher(algorithms.AES(key), modes.CBC(nonce)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


class SymmetricVault:
    """Encrypts document bytes under a fresh key per call (IVault).

    Keys are never logged and never stored by the vault.
    """

    def encrypt(self, plaintext: bytes) -> EncryptionEnvelope:
        """Encrypt plaintext under a new key and nonce.

        Raises:
            CryptoException: Random source or cipher failure.
        """
        try:
            key = os.urandom(KEY_SIZE)
            nonce = os.urandom(NONCE_SIZE)
            ciphertext = _cbc_encrypt(_derive_subkey(key, _ENC_KEY_INFO), nonce, plaintext)
            mac = self._mac(key, nonce, ciphertext)
        except Exception as e:
            logger.exception("Encryption failed: %s", type(e).__name__)
            raise CryptoException() from e
        return EncryptionEnvelope(key=key, nonce=nonce, ciphertext=ciphertext, mac=mac)

    def decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes, mac: bytes) -> bytes:
        """Verify the MAC, then decrypt.

        Raises:
            IntegrityException: Wrong key, wrong nonce, or modified ciphertext/MAC.
        """
        self._check_sizes(key, nonce)
        expected = self._mac(key, nonce, ciphertext)
        if not hmac.compare_digest(expected, mac):
            raise IntegrityException()
        try:
            return _cbc_decrypt(_derive_subkey(key, _ENC_KEY_INFO), nonce, ciphertext)
        except ValueError as e:
            raise IntegrityException() from e

    def decrypt_legacy(self, key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        """Decrypt an unauthenticated artifact (raw key, no MAC).

        Wrong keys are only detected through invalid padding, so a wrong key
        can occasionally yield garbage; prefer decrypt for new artifacts.

        Raises:
            IntegrityException: Invalid padding or block length.
        """
        self._check_sizes(key, nonce)
        try:
            return _cbc_decrypt(key, nonce, ciphertext)
        except ValueError as e:
            raise IntegrityException() from e

    @staticmethod
    def _mac(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        mac_key = _derive_subkey(key, _MAC_KEY_INFO)
        return hmac.new(mac_key, nonce + ciphertext, hashlib.sha256).digest()

    @staticmethod
    def _check_sizes(key: bytes, nonce: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise IntegrityException(f"Invalid key length: expected {KEY_SIZE} bytes")
        if len(nonce) != NONCE_SIZE:
            raise IntegrityException(f"Invalid IV length: expected {NONCE_SIZE} bytes")
