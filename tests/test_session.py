import pytest

from humint.common.exceptions import (
    AuthenticationFailed,
    InvalidSignature,
    MalformedInput,
    SessionError,
)
from humint.common.models import PostBundle, SessionConfig
from humint.session import CryptoSession

from .conftest import wallet_signature, wallet_signature_b64


def _session(account_id: str, **overrides) -> CryptoSession:
    session = CryptoSession(**overrides)
    session.login(account_id, wallet_signature(account_id))
    return session


@pytest.fixture
def source() -> CryptoSession:
    return _session("alice.near")


@pytest.fixture
def subscriber() -> CryptoSession:
    return _session("bob.near")


@pytest.fixture
def outsider() -> CryptoSession:
    return _session("eve.near")


def test_end_to_end_source_to_subscriber(source, subscriber, outsider) -> None:
    bundle = source.seal_post(
        "Operation details...", "press", subscriber.keypair.public_key, epoch="2025-06"
    )
    assert bundle.post.tier == "press"
    assert bundle.post.epoch == "2025-06"

    # Subscriber re-derives the same secret and epoch key independently
    assert source.shared_secret(subscriber.public_key_hex) == subscriber.shared_secret(
        source.public_key_hex
    )
    assert source.epoch_key(
        subscriber.public_key_hex, "press", "2025-06"
    ) == subscriber.epoch_key(source.public_key_hex, "press", "2025-06")
    assert subscriber.open_post_text(bundle, source.public_key_hex) == "Operation details..."

    # Right tier and epoch strings, wrong DH relationship
    with pytest.raises(AuthenticationFailed):
        outsider.open_post(bundle, source.public_key_hex)


def test_seal_defaults_to_current_epoch(source, subscriber) -> None:
    from humint.core.epoch import current_epoch  # noqa: PLC0415

    bundle = source.seal_post(b"now", "vip", subscriber.public_key_hex)
    assert bundle.post.epoch == current_epoch()


def test_post_survives_json_storage(source, subscriber) -> None:
    bundle = source.seal_post(b"intel", "press", subscriber.public_key_hex, epoch="2025-06")
    restored = PostBundle.model_validate_json(bundle.model_dump_json())
    assert subscriber.open_post(restored.post, source.public_key_hex) == b"intel"


def test_media_blobs(source, subscriber) -> None:
    bundle = source.seal_post(
        "caption",
        "press",
        subscriber.public_key_hex,
        epoch="2025-06",
        media=[b"\x89PNG fake image", b"second blob"],
        media_type="image/png",
    )
    assert len(bundle.media) == 2  # noqa: PLR2004
    assert bundle.media[0].media_type == "image/png"
    assert subscriber.open_media(bundle, 0, source.public_key_hex) == b"\x89PNG fake image"
    assert subscriber.open_media(bundle, 1, source.public_key_hex) == b"second blob"
    with pytest.raises(MalformedInput):
        subscriber.open_media(bundle, 2, source.public_key_hex)


def test_tampered_content_hash_detected(source, subscriber) -> None:
    bundle = source.seal_post(b"intel", "press", subscriber.public_key_hex, epoch="2025-06")
    bundle.post.content_hash = "00" * 32
    with pytest.raises(AuthenticationFailed):
        subscriber.open_post(bundle, source.public_key_hex)
    assert subscriber.open_post(bundle, source.public_key_hex, verify_hash=False) == b"intel"


def test_rewritten_epoch_metadata_fails(source, subscriber) -> None:
    bundle = source.seal_post(b"june only", "press", subscriber.public_key_hex, epoch="2025-06")
    bundle.post.epoch = "2025-07"
    with pytest.raises(AuthenticationFailed):
        subscriber.open_post(bundle, source.public_key_hex)


def test_unknown_cipher_suite_rejected(source, subscriber) -> None:
    bundle = source.seal_post(b"x", "press", subscriber.public_key_hex, epoch="2025-06")
    bundle.post.cipher_suite = "v0:XOR"
    with pytest.raises(MalformedInput):
        subscriber.open_post(bundle, source.public_key_hex)


def test_grant_flow(source, subscriber, outsider) -> None:
    carol = _session("carol.near")
    bundle = source.seal_post(b"one-off disclosure", "press", subscriber.public_key_hex, epoch="2025-06")

    post_grant = source.grant_post(
        bundle, subscriber.public_key_hex, carol.public_key_hex, post_id="post-1"
    )
    assert post_grant.source_public_key == source.public_key_hex
    assert post_grant.recipient_public_key == carol.public_key_hex
    assert post_grant.post_id == "post-1"

    assert carol.open_granted_post(bundle, post_grant) == b"one-off disclosure"
    with pytest.raises(AuthenticationFailed):
        outsider.open_granted_post(bundle, post_grant)


def test_cache_is_reused_and_cleared_on_logout(source, subscriber) -> None:
    first = source.epoch_key(subscriber.public_key_hex, "press", "2025-06")
    assert source.epoch_key(subscriber.keypair.public_key, "press", "2025-06") == first
    assert source._epoch_keys
    assert source._shared_secrets

    source.logout()
    assert not source.is_logged_in()
    assert source.account_id is None
    assert source._epoch_keys == {}
    assert source._shared_secrets == {}
    with pytest.raises(SessionError):
        source.epoch_key(subscriber.public_key_hex, "press", "2025-06")


def test_cache_can_be_disabled(subscriber) -> None:
    session = _session("alice.near", cache_keys=False)
    key = session.epoch_key(subscriber.public_key_hex, "press", "2025-06")
    assert key == session.epoch_key(subscriber.public_key_hex, "press", "2025-06")
    assert session._epoch_keys == {}
    assert session._shared_secrets == {}


def test_context_manager_logs_out(subscriber) -> None:
    with _session("alice.near") as session:
        session.seal_post(b"x", "press", subscriber.public_key_hex, epoch="2025-06")
        assert session.is_logged_in()
    assert not session.is_logged_in()


def test_operations_require_identity(subscriber) -> None:
    session = CryptoSession()
    assert not session.is_logged_in()
    with pytest.raises(SessionError):
        session.seal_post(b"x", "press", subscriber.public_key_hex, epoch="2025-06")
    with pytest.raises(SessionError):
        _ = session.public_key_hex


def test_login_switch_clears_cache(subscriber) -> None:
    session = _session("alice.near")
    session.epoch_key(subscriber.public_key_hex, "press", "2025-06")
    session.login("eve.near", wallet_signature("eve.near"))
    assert session.account_id == "eve.near"
    assert session._epoch_keys == {}


def test_login_with_wallet() -> None:
    class Wallet:
        def sign(self, message: str) -> str:
            assert message == "Custom Tag | alice.near"
            return wallet_signature_b64("alice.near")

    session = CryptoSession(SessionConfig(domain_tag="Custom Tag"))
    keypair = session.login_with_wallet("alice.near", Wallet())
    assert keypair == _session("alice.near").keypair


def test_session_config_overrides() -> None:
    session = CryptoSession(SessionConfig(signature_length=32))
    assert session.signature_length == 32  # noqa: PLR2004
    session.login("alice.near", b"\x05" * 32)
    with pytest.raises(InvalidSignature):
        session.login("alice.near", wallet_signature("alice.near"))


def test_login_during_key_agreement_does_not_leak_secret(monkeypatch, subscriber) -> None:
    from humint.core.agreement import agree  # noqa: PLC0415
    from humint.session import session as session_module  # noqa: PLC0415

    session = _session("alice.near")
    alice = session.keypair

    def agree_then_switch(my_private_key, peer_public_key):
        secret = agree(my_private_key, peer_public_key)
        monkeypatch.setattr(session_module, "agree", agree)
        session.login("eve.near", wallet_signature("eve.near"))
        return secret

    monkeypatch.setattr(session_module, "agree", agree_then_switch)
    in_flight = session.shared_secret(subscriber.public_key_hex)
    assert in_flight == agree(alice.private_key, subscriber.keypair.public_key)
    assert session._shared_secrets == {}

    eve_secret = session.shared_secret(subscriber.public_key_hex)
    assert eve_secret == agree(session.keypair.private_key, subscriber.keypair.public_key)
    assert eve_secret != in_flight


def test_logout_during_epoch_key_leaves_cache_empty(monkeypatch, subscriber) -> None:
    from humint.core.agreement import agree  # noqa: PLC0415
    from humint.session import session as session_module  # noqa: PLC0415

    session = _session("alice.near")

    def agree_then_logout(my_private_key, peer_public_key):
        session.logout()
        return agree(my_private_key, peer_public_key)

    monkeypatch.setattr(session_module, "agree", agree_then_logout)
    session.epoch_key(subscriber.public_key_hex, "press", "2025-06")
    assert not session.is_logged_in()
    assert session._shared_secrets == {}
    assert session._epoch_keys == {}


def test_session_leaves_package_logger_alone() -> None:
    import logging  # noqa: PLC0415

    package_logger = logging.getLogger("humint")
    original_level = package_logger.level
    try:
        package_logger.setLevel(logging.ERROR)
        CryptoSession()
        assert package_logger.level == logging.ERROR

        CryptoSession(log_level=logging.DEBUG)
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(original_level)
