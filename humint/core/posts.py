"""
Post encryption and decryption.

Each post gets a fresh random content key; the body is encrypted under it
and the content key itself is wrapped under the epoch key. Re-granting a
post therefore only re-wraps 32 bytes, never the body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.core import cipher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SealedPost:
    """Raw output of :func:`encrypt_post`."""

    encrypted_content: bytes = field(repr=False)
    iv: bytes
    content_key_wrapped: bytes = field(repr=False)
    content_hash: str


def _as_bytes(content: bytes | str) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


def encrypt_post(content: bytes | str, epoch_key: bytes) -> SealedPost:
    """Encrypt ``content`` under a new content key wrapped by ``epoch_key``."""
    CryptoUtils.require_length(epoch_key, Config.KEY_SIZE, "epoch key")
    plaintext = _as_bytes(content)

    content_key = cipher.generate_key()
    iv = cipher.generate_iv()
    encrypted_content = cipher.encrypt(plaintext, content_key, iv)
    content_key_wrapped = cipher.wrap(content_key, epoch_key)

    logger.debug("Sealed post of %d bytes", len(plaintext))
    return SealedPost(
        encrypted_content=encrypted_content,
        iv=iv,
        content_key_wrapped=content_key_wrapped,
        content_hash=CryptoUtils.hash_content(plaintext),
    )


def unwrap_content_key(content_key_wrapped: bytes, epoch_key: bytes) -> bytes:
    """Recover a post's content key; this is where access is enforced."""
    content_key = cipher.unwrap(content_key_wrapped, epoch_key)
    return CryptoUtils.require_length(content_key, Config.KEY_SIZE, "content key")


def decrypt_post(
    encrypted_content: bytes,
    iv: bytes,
    content_key_wrapped: bytes,
    epoch_key: bytes,
) -> bytes:
    """Unwrap the content key with ``epoch_key`` and decrypt the body.

    Raises:
        AuthenticationFailed: the epoch key is wrong or any part was tampered
    """
    content_key = unwrap_content_key(content_key_wrapped, epoch_key)
    return cipher.decrypt(encrypted_content, content_key, iv)


def verify_content_hash(plaintext: bytes | str, content_hash: str) -> bool:
    return CryptoUtils.constant_time_equals(
        CryptoUtils.hash_content(_as_bytes(plaintext)), content_hash.lower()
    )
