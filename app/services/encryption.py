"""
API key encryption at rest.

AES-256-CBC with a scrypt-derived key. Ciphertext is stored as
``<iv hex>:<ciphertext hex>``.
"""

import os
from functools import lru_cache
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from app.config import settings

_SALT = b"salt"
_KEY_LENGTH = 32
_BLOCK_BITS = 128


class DecryptionError(ValueError):
    """Stored ciphertext could not be decrypted with the configured key."""

    pass


@lru_cache(maxsize=8)
def _derive_key(secret: str) -> bytes:
    kdf = Scrypt(salt=_SALT, length=_KEY_LENGTH, n=2**14, r=8, p=1)
    return kdf.derive(secret.encode("utf-8"))


def _current_key(secret: Optional[str]) -> bytes:
    return _derive_key(secret if secret is not None else (settings.ENCRYPTION_KEY or "default-key"))


def encrypt_api_key(api_key: str, secret: Optional[str] = None) -> str:
    """
    Encrypt an API key for storage.

    Args:
        api_key: Plaintext key
        secret: Override for ENCRYPTION_KEY (tests)

    Returns:
        str: ``iv:ciphertext`` in hex
    """
    iv = os.urandom(16)
    padder = padding.PKCS7(_BLOCK_BITS).padder()
    data = padder.update(api_key.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(_current_key(secret)), modes.CBC(iv)).encryptor()
    encrypted = encryptor.update(data) + encryptor.finalize()
    return f"{iv.hex()}:{encrypted.hex()}"


def decrypt_api_key(encrypted_key: str, secret: Optional[str] = None) -> str:
    """
    Decrypt a stored API key.

    Raises:
        DecryptionError: If the value is malformed or the key does not match
    """
    try:
        iv_hex, data_hex = encrypted_key.split(":", 1)
        iv = bytes.fromhex(iv_hex)
        data = bytes.fromhex(data_hex)

        decryptor = Cipher(algorithms.AES(_current_key(secret)), modes.CBC(iv)).decryptor()
        padded = decryptor.update(data) + decryptor.finalize()

        unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise DecryptionError(f"Failed to decrypt API key: {e}") from e
