import pytest

from humint.common.exceptions import AuthenticationFailed, MalformedInput
from humint.core import cipher
from humint.core.agreement import agree
from humint.core.epoch import derive_epoch_key
from humint.core.grants import grant, ungrant


@pytest.fixture
def content_key() -> bytes:
    return cipher.generate_key()


def test_grant_round_trip(alice, bob, content_key) -> None:
    wrapped = grant(content_key, bob.public_key, alice.private_key)
    assert content_key not in wrapped
    assert ungrant(wrapped, alice.public_key, bob.private_key) == content_key


def test_grant_is_isolated_to_recipient(alice, bob, eve, content_key) -> None:
    wrapped = grant(content_key, bob.public_key, alice.private_key)
    with pytest.raises(AuthenticationFailed):
        ungrant(wrapped, alice.public_key, eve.private_key)


def test_grant_requires_matching_source(alice, bob, eve, content_key) -> None:
    wrapped = grant(content_key, bob.public_key, alice.private_key)
    with pytest.raises(AuthenticationFailed):
        ungrant(wrapped, eve.public_key, bob.private_key)


def test_grant_key_is_separate_from_epoch_keys(alice, bob, content_key) -> None:
    wrapped = grant(content_key, bob.public_key, alice.private_key)
    shared = agree(bob.private_key, alice.public_key)
    with pytest.raises(AuthenticationFailed):
        cipher.unwrap(wrapped, derive_epoch_key(shared, "grant", "content-key-wrap"))


def test_content_key_length_checked(alice, bob) -> None:
    with pytest.raises(MalformedInput):
        grant(b"\x01" * 16, bob.public_key, alice.private_key)
