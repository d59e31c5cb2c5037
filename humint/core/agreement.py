"""
X25519 key agreement between two identities.
"""

from __future__ import annotations

import hmac

from cryptography.hazmat.primitives.asymmetric.x25519 import (
    X25519PrivateKey,
    X25519PublicKey,
)

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.common.exceptions import InvalidPublicKey

_ZERO_SECRET = bytes(Config.KEY_SIZE)


def agree(my_private_key: bytes, peer_public_key: bytes) -> bytes:
    """Compute the 32-byte shared secret with a peer.

    ``agree(a.private_key, b.public_key) == agree(b.private_key, a.public_key)``

    Raises:
        MalformedInput: either key is not 32 bytes
        InvalidPublicKey: the peer key is of small order or otherwise rejected
    """
    private_bytes = CryptoUtils.require_length(
        my_private_key, Config.KEY_SIZE, "private key"
    )
    public_bytes = CryptoUtils.require_length(
        peer_public_key, Config.KEY_SIZE, "peer public key"
    )

    private_key = X25519PrivateKey.from_private_bytes(private_bytes)
    try:
        peer = X25519PublicKey.from_public_bytes(public_bytes)
        shared = private_key.exchange(peer)
    except ValueError as err:
        # OpenSSL refuses small-order points (all-zero output)
        msg = "Peer public key rejected by X25519"
        raise InvalidPublicKey(msg) from err

    if hmac.compare_digest(shared, _ZERO_SECRET):
        msg = "Peer public key is of small order"
        raise InvalidPublicKey(msg)
    return shared
