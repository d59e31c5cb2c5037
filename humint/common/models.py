"""
Pydantic models for content-store bundles and session settings.

Byte fields travel as base64 (ciphertexts, wrapped keys) or hex (IVs,
hashes, public keys), matching what the content store persists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.common.exceptions import MalformedInput

if TYPE_CHECKING:
    from humint.core.posts import SealedPost


class SealedPayload(BaseModel):
    encrypted_content: str
    iv: str
    content_key_wrapped: str
    content_hash: str

    @classmethod
    def from_sealed(cls, sealed: SealedPost, **extra: Any) -> SealedPayload:
        return cls(
            encrypted_content=CryptoUtils.b64encode(sealed.encrypted_content),
            iv=sealed.iv.hex(),
            content_key_wrapped=CryptoUtils.b64encode(sealed.content_key_wrapped),
            content_hash=sealed.content_hash,
            **extra,
        )

    def to_sealed(self) -> SealedPost:
        """Decode the wire fields, raising MalformedInput on bad encodings."""
        from humint.core.posts import SealedPost  # noqa: PLC0415

        iv = CryptoUtils.hex_decode(self.iv, "iv")
        CryptoUtils.require_length(iv, Config.IV_SIZE, "iv")
        return SealedPost(
            encrypted_content=CryptoUtils.b64decode(
                self.encrypted_content, "encrypted_content"
            ),
            iv=iv,
            content_key_wrapped=CryptoUtils.b64decode(
                self.content_key_wrapped, "content_key_wrapped"
            ),
            content_hash=self.content_hash,
        )


class EncryptedPost(SealedPayload):
    tier: str = Field(min_length=1)
    epoch: str = Field(min_length=1)
    cipher_suite: str = Config.CIPHER_SUITE


class EncryptedMedia(SealedPayload):
    media_type: str = "application/octet-stream"


class PostBundle(BaseModel):
    post: EncryptedPost
    media: list[EncryptedMedia] = Field(default_factory=list)


class PostGrant(BaseModel):
    wrapped_key: str
    source_public_key: str
    recipient_public_key: str
    post_id: str | None = None

    def wrapped_key_bytes(self) -> bytes:
        return CryptoUtils.b64decode(self.wrapped_key, "wrapped_key")

    def source_public_key_bytes(self) -> bytes:
        return CryptoUtils.hex_decode(self.source_public_key, "source_public_key")


class SessionConfig(BaseModel):
    domain_tag: str | None = None
    signature_length: int | None = Field(default=None, gt=0)
    cache_keys: bool | None = None
    log_level: int | None = None
