"""At-rest encryption for values kept in the device token store."""
from __future__ import annotations

from typing import Final

from cryptography.fernet import Fernet, InvalidToken

from ..exceptions import VaultError
from .secrets import clean_secret

_PREFIX: Final[str] = "vault.v1:"


def _coerce_key(raw_key: str) -> Fernet:
    try:
        return Fernet(raw_key.encode("utf-8"))
    except (ValueError, TypeError) as exc:
        raise VaultError("Vault key is invalid") from exc


class TokenVault:
    """Fernet wrapper producing ``vault.v1:``-prefixed ciphertexts."""

    def __init__(self, key: str) -> None:
        self._fernet = _coerce_key(key)

    def encrypt_text(self, value: str) -> str:
        """Encrypt ``value`` and return a prefixed ciphertext safe for storage."""

        if not value:
            value = ""
        if value.startswith(_PREFIX):
            return value
        token = self._fernet.encrypt(value.encode("utf-8")).decode("utf-8")
        return f"{_PREFIX}{token}"

    def decrypt_text(self, value: str) -> str:
        """Attempt to decrypt ``value``; passthrough when no vault prefix is set."""

        if not value:
            return ""
        if not value.startswith(_PREFIX):
            return value
        token = value[len(_PREFIX) :]
        try:
            payload = self._fernet.decrypt(token.encode("utf-8"))
        except InvalidToken as exc:
            raise VaultError("Unable to decrypt value") from exc
        return payload.decode("utf-8")


def build_vault(key: str | None) -> TokenVault | None:
    """Return a vault for ``key`` or ``None`` when no usable key is configured."""

    cleaned = clean_secret(key)
    if cleaned is None:
        return None
    return TokenVault(cleaned)


def is_ciphertext(value: str | None) -> bool:
    """Return ``True`` when ``value`` appears to be vault ciphertext."""

    return bool(value and value.startswith(_PREFIX))


__all__ = ["TokenVault", "build_vault", "is_ciphertext"]
