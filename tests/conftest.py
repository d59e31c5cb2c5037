import base64
import hashlib

import pytest

from humint.core.keypair import Keypair, derive_keypair


def wallet_signature(account_id: str) -> bytes:
    """Stand-in for a deterministic 64-byte ed25519 wallet signature."""
    return hashlib.sha512(f"wallet-signature:{account_id}".encode()).digest()


def wallet_signature_b64(account_id: str) -> str:
    return base64.b64encode(wallet_signature(account_id)).decode()


@pytest.fixture
def alice() -> Keypair:
    return derive_keypair("alice.near", wallet_signature("alice.near"))


@pytest.fixture
def bob() -> Keypair:
    return derive_keypair("bob.near", wallet_signature("bob.near"))


@pytest.fixture
def eve() -> Keypair:
    return derive_keypair("eve.near", wallet_signature("eve.near"))
