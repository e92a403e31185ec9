"""Secret handling and at-rest encryption helpers."""
from .secrets import clean_secret, is_placeholder
from .vault import TokenVault, build_vault, is_ciphertext

__all__ = ["clean_secret", "is_placeholder", "TokenVault", "build_vault", "is_ciphertext"]
