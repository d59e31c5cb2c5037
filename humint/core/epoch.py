"""
Epoch key scheduling.

One long-lived DH relationship yields an independent key per (tier, epoch):
HKDF-SHA256 with ``salt = tier | epoch`` and ``info = "epoch-key"``. The
epoch string is opaque here; calendar policy belongs to the caller.
"""

from __future__ import annotations

from datetime import datetime, timezone

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.common.exceptions import MalformedInput
from humint.core.agreement import agree

SALT_SEPARATOR = "|"


def epoch_salt(tier: str, epoch: str) -> bytes:
    if not isinstance(tier, str) or not tier:
        msg = "tier must be a non-empty string"
        raise MalformedInput(msg)
    if not isinstance(epoch, str) or not epoch:
        msg = "epoch must be a non-empty string"
        raise MalformedInput(msg)
    if SALT_SEPARATOR in tier:
        msg = f"tier must not contain '{SALT_SEPARATOR}'"
        raise MalformedInput(msg)
    return f"{tier}{SALT_SEPARATOR}{epoch}".encode()


def derive_epoch_key(shared_secret: bytes, tier: str, epoch: str) -> bytes:
    """Derive the 32-byte key for ``(tier, epoch)`` from a DH shared secret."""
    secret = CryptoUtils.require_length(
        shared_secret, Config.KEY_SIZE, "shared secret"
    )
    return CryptoUtils.hkdf_sha256(
        secret, epoch_salt(tier, epoch), Config.EPOCH_KEY_INFO
    )


def derive_epoch_key_for_peer(
    my_private_key: bytes, peer_public_key: bytes, tier: str, epoch: str
) -> bytes:
    """Agree with the peer, then derive the epoch key."""
    return derive_epoch_key(agree(my_private_key, peer_public_key), tier, epoch)


def current_epoch(now: datetime | None = None) -> str:
    """Calendar-month epoch (``YYYY-MM``, UTC)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return f"{now.year:04d}-{now.month:02d}"
