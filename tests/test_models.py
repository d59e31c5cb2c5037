import os

import pytest
from pydantic import ValidationError

from humint.common.config import Config
from humint.common.exceptions import MalformedInput
from humint.common.models import (
    EncryptedMedia,
    EncryptedPost,
    PostBundle,
    PostGrant,
    SessionConfig,
)
from humint.core.posts import encrypt_post


@pytest.fixture
def sealed():
    return encrypt_post(b"intel", os.urandom(32))


def test_encrypted_post_from_sealed(sealed) -> None:
    post = EncryptedPost.from_sealed(sealed, tier="press", epoch="2025-06")
    assert post.iv == sealed.iv.hex()
    assert post.content_hash == sealed.content_hash
    assert post.cipher_suite == Config.CIPHER_SUITE
    assert post.to_sealed() == sealed


def test_encrypted_media_defaults(sealed) -> None:
    media = EncryptedMedia.from_sealed(sealed)
    assert media.media_type == "application/octet-stream"
    assert media.to_sealed() == sealed


def test_bad_encodings_raise_malformed_input(sealed) -> None:
    post = EncryptedPost.from_sealed(sealed, tier="press", epoch="2025-06")

    bad_b64 = post.model_copy(update={"encrypted_content": "***"})
    with pytest.raises(MalformedInput):
        bad_b64.to_sealed()

    bad_hex = post.model_copy(update={"iv": "zz"})
    with pytest.raises(MalformedInput):
        bad_hex.to_sealed()

    short_iv = post.model_copy(update={"iv": "00" * 8})
    with pytest.raises(MalformedInput):
        short_iv.to_sealed()


def test_tier_and_epoch_required(sealed) -> None:
    with pytest.raises(ValidationError):
        EncryptedPost.from_sealed(sealed, tier="", epoch="2025-06")
    with pytest.raises(ValidationError):
        EncryptedPost.from_sealed(sealed, tier="press", epoch="")


def test_post_bundle_defaults(sealed) -> None:
    post = EncryptedPost.from_sealed(sealed, tier="press", epoch="2025-06")
    bundle = PostBundle(post=post)
    assert bundle.media == []
    assert PostBundle.model_validate_json(bundle.model_dump_json()) == bundle


def test_post_grant_decoding() -> None:
    grant = PostGrant(
        wrapped_key="AAEC",
        source_public_key="ab" * 32,
        recipient_public_key="cd" * 32,
    )
    assert grant.wrapped_key_bytes() == b"\x00\x01\x02"
    assert grant.source_public_key_bytes() == b"\xab" * 32
    assert grant.post_id is None
    with pytest.raises(MalformedInput):
        grant.model_copy(update={"source_public_key": "xyz"}).source_public_key_bytes()


def test_session_config_validation() -> None:
    assert SessionConfig().model_dump(exclude_none=True) == {}
    with pytest.raises(ValidationError):
        SessionConfig(signature_length=0)
