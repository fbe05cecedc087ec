"""Tests for SymmetricVault (AES-256-CBC + HMAC-SHA256)."""

import os

import pytest

from app.application.services.vault_service import (
    KEY_SIZE,
    MAC_SIZE,
    NONCE_SIZE,
    SymmetricVault,
    _cbc_encrypt,
)
from app.domain.exceptions import CryptoException, IntegrityException


class TestEncrypt:
    """Fresh key and nonce per call; sizes match the artifact format."""

    def test_envelope_sizes(self) -> None:
        env = SymmetricVault().encrypt(b"hello world")
        assert len(env.key) == KEY_SIZE
        assert len(env.nonce) == NONCE_SIZE
        assert len(env.mac) == MAC_SIZE
        assert len(env.ciphertext) % 16 == 0

    def test_same_plaintext_twice_gives_different_keys_and_ciphertexts(self) -> None:
        vault = SymmetricVault()
        a = vault.encrypt(b"same bytes")
        b = vault.encrypt(b"same bytes")
        assert a.key != b.key
        assert a.nonce != b.nonce
        assert a.ciphertext != b.ciphertext

    def test_repr_hides_key(self) -> None:
        env = SymmetricVault().encrypt(b"secret")
        assert env.key.hex() not in repr(env)

    @pytest.mark.parametrize("error", [NotImplementedError, OSError])
    def test_random_source_failure_raises_crypto_error(
        self, monkeypatch: pytest.MonkeyPatch, error: type[Exception]
    ) -> None:
        def broken_urandom(n: int) -> bytes:
            raise error("no entropy")

        monkeypatch.setattr(os, "urandom", broken_urandom)
        with pytest.raises(CryptoException) as exc_info:
            SymmetricVault().encrypt(b"data")
        assert exc_info.value.error_code == "CRYPTO_ERROR"


class TestDecrypt:
    """Authenticated decryption returns plaintext or raises; never garbage."""

    def test_decrypts_with_correct_key(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload" * 100)
        assert vault.decrypt(env.key, env.nonce, env.ciphertext, env.mac) == b"payload" * 100

    def test_empty_plaintext(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"")
        assert vault.decrypt(env.key, env.nonce, env.ciphertext, env.mac) == b""

    def test_wrong_key_raises(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload")
        with pytest.raises(IntegrityException):
            vault.decrypt(os.urandom(KEY_SIZE), env.nonce, env.ciphertext, env.mac)

    def test_wrong_nonce_raises(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload")
        with pytest.raises(IntegrityException):
            vault.decrypt(env.key, os.urandom(NONCE_SIZE), env.ciphertext, env.mac)

    def test_modified_ciphertext_raises(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload")
        tampered = bytes([env.ciphertext[0] ^ 0x01]) + env.ciphertext[1:]
        with pytest.raises(IntegrityException):
            vault.decrypt(env.key, env.nonce, tampered, env.mac)

    def test_modified_mac_raises(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload")
        with pytest.raises(IntegrityException):
            vault.decrypt(env.key, env.nonce, env.ciphertext, bytes(MAC_SIZE))

    def test_short_key_raises(self) -> None:
        vault = SymmetricVault()
        env = vault.encrypt(b"payload")
        with pytest.raises(IntegrityException, match="key length"):
            vault.decrypt(env.key[:16], env.nonce, env.ciphertext, env.mac)


class TestDecryptLegacy:
    """Artifacts without a MAC: raw key used directly for CBC."""

    def test_legacy_roundtrip(self) -> None:
        key = os.urandom(KEY_SIZE)
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = _cbc_encrypt(key, nonce, b"legacy document")
        assert SymmetricVault().decrypt_legacy(key, nonce, ciphertext) == b"legacy document"

    def test_legacy_bad_length_raises(self) -> None:
        with pytest.raises(IntegrityException):
            SymmetricVault().decrypt_legacy(
                os.urandom(KEY_SIZE), os.urandom(NONCE_SIZE), b"not-a-block"
            )
