"""
Point-to-point grants of a single content key.

A grant wraps a content key for one recipient's public key, outside any
tier or epoch. The wrapping key is HKDF over the source/recipient DH secret
with its own salt and info, so it never collides with an epoch key.
"""

from __future__ import annotations

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.core import cipher
from humint.core.agreement import agree


def _grant_key(my_private_key: bytes, peer_public_key: bytes) -> bytes:
    shared = agree(my_private_key, peer_public_key)
    return CryptoUtils.hkdf_sha256(shared, Config.GRANT_SALT, Config.GRANT_INFO)


def grant(
    content_key: bytes, recipient_public_key: bytes, my_private_key: bytes
) -> bytes:
    """Wrap ``content_key`` so only the holder of ``recipient_public_key`` can open it."""
    content_key = CryptoUtils.require_length(
        content_key, Config.KEY_SIZE, "content key"
    )
    return cipher.wrap(content_key, _grant_key(my_private_key, recipient_public_key))


def ungrant(
    wrapped_key: bytes, source_public_key: bytes, my_private_key: bytes
) -> bytes:
    """Recover a granted content key.

    Raises:
        AuthenticationFailed: the grant was made for someone else or tampered
    """
    content_key = cipher.unwrap(
        wrapped_key, _grant_key(my_private_key, source_public_key)
    )
    return CryptoUtils.require_length(content_key, Config.KEY_SIZE, "content key")
