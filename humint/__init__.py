# HUMINT zero-storage source encryption

from humint.common.decorators import access_gated, requires_identity
from humint.common.exceptions import (
    AccessDenied,
    AuthenticationFailed,
    HumintError,
    InvalidPublicKey,
    InvalidSignature,
    MalformedInput,
    SessionError,
    StoreError,
)
from humint.common.models import (
    EncryptedMedia,
    EncryptedPost,
    PostBundle,
    PostGrant,
    SessionConfig,
)
from humint.session import CryptoSession

__all__ = [
    "AccessDenied",
    "AuthenticationFailed",
    "CryptoSession",
    "EncryptedMedia",
    "EncryptedPost",
    "HumintError",
    "InvalidPublicKey",
    "InvalidSignature",
    "MalformedInput",
    "PostBundle",
    "PostGrant",
    "SessionConfig",
    "SessionError",
    "StoreError",
    "access_gated",
    "requires_identity",
]
