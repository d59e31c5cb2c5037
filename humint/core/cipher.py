"""
AES-256-GCM authenticated encryption.

``encrypt``/``decrypt`` take the IV as a separate argument; ``wrap``/``unwrap``
carry it as a 12-byte prefix (``iv || ciphertext || tag``) for key wrapping.
IVs always come from the caller or ``os.urandom``; nothing here reuses one.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.common.exceptions import AuthenticationFailed


def generate_key() -> bytes:
    return os.urandom(Config.KEY_SIZE)


def generate_iv() -> bytes:
    return os.urandom(Config.IV_SIZE)


def encrypt(
    plaintext: bytes,
    key: bytes,
    iv: bytes,
    associated_data: bytes | None = None,
) -> bytes:
    """Encrypt and authenticate; the 16-byte tag is appended."""
    key = CryptoUtils.require_length(key, Config.KEY_SIZE, "key")
    iv = CryptoUtils.require_length(iv, Config.IV_SIZE, "iv")
    return AESGCM(key).encrypt(iv, plaintext, associated_data)


def decrypt(
    ciphertext: bytes,
    key: bytes,
    iv: bytes,
    associated_data: bytes | None = None,
) -> bytes:
    """Verify and decrypt.

    Raises:
        AuthenticationFailed: wrong key, wrong IV or tampered ciphertext
        MalformedInput: key or IV of the wrong length
    """
    key = CryptoUtils.require_length(key, Config.KEY_SIZE, "key")
    iv = CryptoUtils.require_length(iv, Config.IV_SIZE, "iv")
    try:
        return AESGCM(key).decrypt(iv, ciphertext, associated_data)
    except InvalidTag as err:
        raise AuthenticationFailed from err


def wrap(
    plaintext: bytes, key: bytes, associated_data: bytes | None = None
) -> bytes:
    """Encrypt under a fresh IV and prepend it."""
    iv = generate_iv()
    return iv + encrypt(plaintext, key, iv, associated_data)


def unwrap(
    blob: bytes, key: bytes, associated_data: bytes | None = None
) -> bytes:
    """Inverse of :func:`wrap`."""
    if len(blob) < Config.IV_SIZE + Config.TAG_SIZE:
        # Truncation is indistinguishable from any other tampering
        raise AuthenticationFailed
    iv, ciphertext = blob[: Config.IV_SIZE], blob[Config.IV_SIZE :]
    return decrypt(ciphertext, key, iv, associated_data)
