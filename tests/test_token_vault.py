"""Unit tests for the token vault helpers."""

from __future__ import annotations

import pytest
from cryptography.fernet import Fernet

from cinematch.exceptions import VaultError
from cinematch.security import TokenVault, clean_secret, is_ciphertext


def _vault() -> TokenVault:
    return TokenVault(Fernet.generate_key().decode("utf-8"))


def test_encrypt_text_round_trip() -> None:
    vault = _vault()
    ciphertext = vault.encrypt_text("hello world")
    assert ciphertext.startswith("vault.v1:")
    assert is_ciphertext(ciphertext)
    assert vault.decrypt_text(ciphertext) == "hello world"


def test_encrypt_is_idempotent_and_plaintext_passes_through() -> None:
    vault = _vault()
    ciphertext = vault.encrypt_text("token")
    assert vault.encrypt_text(ciphertext) == ciphertext
    assert vault.decrypt_text("legacy-plain-token") == "legacy-plain-token"


def test_decrypt_with_wrong_key_fails() -> None:
    ciphertext = _vault().encrypt_text("token")
    with pytest.raises(VaultError):
        _vault().decrypt_text(ciphertext)


def test_invalid_key_is_rejected() -> None:
    with pytest.raises(VaultError):
        TokenVault("not-a-fernet-key")


def test_clean_secret_strips_placeholders() -> None:
    assert clean_secret("  real-value ") == "real-value"
    assert clean_secret("changeme") is None
    assert clean_secret("") is None
