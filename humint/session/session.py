"""
Caller-owned crypto session.

Holds the identity keypair re-derived at login plus an in-memory cache of
shared secrets and epoch keys. Nothing here is written to disk, and logout
(or leaving a ``with`` block) drops all of it.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from humint.common import Configurable, fingerprint, setup_logger
from humint.common.config import Config
from humint.common.crypto import CryptoUtils
from humint.common.exceptions import AuthenticationFailed, MalformedInput, SessionError
from humint.common.models import (
    EncryptedMedia,
    EncryptedPost,
    PostBundle,
    PostGrant,
    SessionConfig,
)
from humint.core import cipher
from humint.core.agreement import agree
from humint.core.epoch import current_epoch, derive_epoch_key
from humint.core.grants import grant, ungrant
from humint.core.keypair import Keypair, derive_keypair, derive_keypair_from_wallet
from humint.core.posts import (
    decrypt_post,
    encrypt_post,
    unwrap_content_key,
    verify_content_hash,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from humint.common.interfaces import IWalletSigner
    from humint.common.models import SealedPayload

logger = logging.getLogger(__name__)


def _peer_bytes(peer_public_key: bytes | str) -> bytes:
    if isinstance(peer_public_key, str):
        return CryptoUtils.hex_decode(peer_public_key, "peer public key")
    return bytes(peer_public_key)


def _post_of(post: PostBundle | EncryptedPost) -> EncryptedPost:
    if isinstance(post, PostBundle):
        post = post.post
    if post.cipher_suite != Config.CIPHER_SUITE:
        msg = f"Unsupported cipher suite: {post.cipher_suite}"
        raise MalformedInput(msg)
    return post


class CryptoSession(Configurable):
    """Identity and key cache for one logged-in source or subscriber."""

    domain_tag: str
    signature_length: int
    cache_keys: bool
    log_level: int

    def __init__(self, config: SessionConfig | None = None, **overrides: Any):
        settings = (config or SessionConfig()).model_dump(exclude_none=True)
        settings.update(overrides)
        explicit_log_level = settings.get("log_level") is not None
        self.apply_overrides(
            settings,
            Config(),
            ["domain_tag", "signature_length", "cache_keys", "log_level"],
        )
        # Leave the package logger to the host application unless asked
        if explicit_log_level:
            setup_logger(logging.getLogger("humint"), self.log_level)

        self.account_id: str | None = None
        self._keypair: Keypair | None = None
        self._lock = threading.Lock()
        # Bumped on every identity change; stale cache inserts are dropped
        self._generation = 0
        self._shared_secrets: dict[bytes, bytes] = {}
        self._epoch_keys: dict[tuple[bytes, str, str], bytes] = {}

    def __enter__(self) -> CryptoSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.logout()

    # Identity

    def login(self, account_id: str, signature: bytes | str) -> Keypair:
        """Re-derive the identity keypair from the wallet signature."""
        keypair = derive_keypair(account_id, signature, self.signature_length)
        self._set_identity(account_id, keypair)
        return keypair

    def login_with_wallet(self, account_id: str, signer: IWalletSigner) -> Keypair:
        keypair = derive_keypair_from_wallet(
            account_id, signer, self.domain_tag, self.signature_length
        )
        self._set_identity(account_id, keypair)
        return keypair

    def _set_identity(self, account_id: str | None, keypair: Keypair | None) -> None:
        with self._lock:
            previous = self._keypair
            self._generation += 1
            self._shared_secrets.clear()
            self._epoch_keys.clear()
            self.account_id = account_id
            self._keypair = keypair
        if keypair is not None:
            logger.info("Session identity loaded: %s", fingerprint(keypair.public_key))
        elif previous is not None:
            logger.info("Session identity dropped: %s", fingerprint(previous.public_key))

    def logout(self) -> None:
        self._set_identity(None, None)

    def is_logged_in(self) -> bool:
        return self._keypair is not None

    @property
    def keypair(self) -> Keypair:
        if self._keypair is None:
            raise SessionError
        return self._keypair

    @property
    def public_key_hex(self) -> str:
        return self.keypair.public_key_hex

    # Key derivation

    def clear_cache(self) -> None:
        with self._lock:
            self._shared_secrets.clear()
            self._epoch_keys.clear()

    def _identity(self) -> tuple[Keypair, int]:
        with self._lock:
            keypair, generation = self._keypair, self._generation
        if keypair is None:
            raise SessionError
        return keypair, generation

    def _cache_get(self, cache: dict, key: Any, generation: int) -> bytes | None:
        if not self.cache_keys:
            return None
        with self._lock:
            if generation != self._generation:
                return None
            return cache.get(key)

    def _cache_put(self, cache: dict, key: Any, value: bytes, generation: int) -> None:
        if not self.cache_keys:
            return
        with self._lock:
            if generation == self._generation:
                cache[key] = value

    def _shared_secret(self, keypair: Keypair, generation: int, peer: bytes) -> bytes:
        cached = self._cache_get(self._shared_secrets, peer, generation)
        if cached is not None:
            return cached
        secret = agree(keypair.private_key, peer)
        self._cache_put(self._shared_secrets, peer, secret, generation)
        return secret

    def shared_secret(self, peer_public_key: bytes | str) -> bytes:
        peer = _peer_bytes(peer_public_key)
        keypair, generation = self._identity()
        return self._shared_secret(keypair, generation, peer)

    def epoch_key(
        self, peer_public_key: bytes | str, tier: str, epoch: str | None = None
    ) -> bytes:
        peer = _peer_bytes(peer_public_key)
        epoch = epoch if epoch is not None else current_epoch()
        keypair, generation = self._identity()
        cache_key = (peer, tier, epoch)
        cached = self._cache_get(self._epoch_keys, cache_key, generation)
        if cached is not None:
            return cached
        key = derive_epoch_key(
            self._shared_secret(keypair, generation, peer), tier, epoch
        )
        self._cache_put(self._epoch_keys, cache_key, key, generation)
        return key

    # Posts

    def seal_post(
        self,
        content: bytes | str,
        tier: str,
        peer_public_key: bytes | str,
        epoch: str | None = None,
        media: Iterable[bytes] = (),
        media_type: str = "application/octet-stream",
    ) -> PostBundle:
        """Encrypt a post (and any media blobs) for ``(tier, epoch)``.

        ``peer_public_key`` is the other end of the DH relationship the
        readers share with this source, e.g. the tier-issuing identity.
        """
        epoch = epoch if epoch is not None else current_epoch()
        key = self.epoch_key(peer_public_key, tier, epoch)

        post = EncryptedPost.from_sealed(
            encrypt_post(content, key), tier=tier, epoch=epoch
        )
        encrypted_media = [
            EncryptedMedia.from_sealed(encrypt_post(blob, key), media_type=media_type)
            for blob in media
        ]
        logger.info(
            "Sealed post for tier=%s epoch=%s with %d media blob(s)",
            tier,
            epoch,
            len(encrypted_media),
        )
        return PostBundle(post=post, media=encrypted_media)

    def _open(
        self,
        payload: SealedPayload,
        key: bytes,
        *,
        verify_hash: bool,
    ) -> bytes:
        sealed = payload.to_sealed()
        plaintext = decrypt_post(
            sealed.encrypted_content, sealed.iv, sealed.content_key_wrapped, key
        )
        if verify_hash and not verify_content_hash(plaintext, sealed.content_hash):
            msg = "Content hash mismatch"
            raise AuthenticationFailed(msg)
        return plaintext

    def open_post(
        self,
        post: PostBundle | EncryptedPost,
        peer_public_key: bytes | str,
        *,
        verify_hash: bool = True,
    ) -> bytes:
        """Re-derive the epoch key and decrypt the post body.

        Raises:
            AuthenticationFailed: this identity cannot derive the post's key
        """
        encrypted = _post_of(post)
        key = self.epoch_key(peer_public_key, encrypted.tier, encrypted.epoch)
        return self._open(encrypted, key, verify_hash=verify_hash)

    def open_post_text(
        self, post: PostBundle | EncryptedPost, peer_public_key: bytes | str
    ) -> str:
        return self.open_post(post, peer_public_key).decode("utf-8")

    def open_media(
        self, bundle: PostBundle, index: int, peer_public_key: bytes | str
    ) -> bytes:
        encrypted = _post_of(bundle)
        try:
            media = bundle.media[index]
        except IndexError as err:
            msg = f"Post has no media blob at index {index}"
            raise MalformedInput(msg) from err
        key = self.epoch_key(peer_public_key, encrypted.tier, encrypted.epoch)
        return self._open(media, key, verify_hash=True)

    # Grants

    def grant_post(
        self,
        post: PostBundle | EncryptedPost,
        peer_public_key: bytes | str,
        recipient_public_key: bytes | str,
        post_id: str | None = None,
    ) -> PostGrant:
        """Re-wrap an existing post's content key for one recipient."""
        encrypted = _post_of(post)
        key = self.epoch_key(peer_public_key, encrypted.tier, encrypted.epoch)
        content_key = unwrap_content_key(encrypted.to_sealed().content_key_wrapped, key)
        recipient = _peer_bytes(recipient_public_key)

        wrapped = grant(content_key, recipient, self.keypair.private_key)
        logger.info("Granted post %s to %s", post_id or "-", fingerprint(recipient))
        return PostGrant(
            wrapped_key=CryptoUtils.b64encode(wrapped),
            source_public_key=self.public_key_hex,
            recipient_public_key=recipient.hex(),
            post_id=post_id,
        )

    def open_granted_post(
        self, post: PostBundle | EncryptedPost, post_grant: PostGrant
    ) -> bytes:
        """Decrypt a post through a grant instead of an epoch key."""
        sealed = _post_of(post).to_sealed()
        content_key = ungrant(
            post_grant.wrapped_key_bytes(),
            post_grant.source_public_key_bytes(),
            self.keypair.private_key,
        )
        plaintext = cipher.decrypt(sealed.encrypted_content, content_key, sealed.iv)
        if not verify_content_hash(plaintext, sealed.content_hash):
            msg = "Content hash mismatch"
            raise AuthenticationFailed(msg)
        return plaintext
