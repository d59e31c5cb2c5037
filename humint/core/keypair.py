"""
Deterministic identity keypairs from wallet signatures.

The wallet signs ``"<domain tag> | <account id>"``; SHA-256 of the signature
is the X25519 private scalar. As long as the wallet reproduces the same
signature, the same keypair comes back and nothing has to be stored.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey

from humint.common.config import Config
from humint.common.exceptions import InvalidSignature, MalformedInput
from humint.common.logging_utils import fingerprint

if TYPE_CHECKING:
    from humint.common.interfaces import IWalletSigner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keypair:
    """X25519 identity keypair; the private half stays out of repr."""

    public_key: bytes
    private_key: bytes = field(repr=False)

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()


def key_derivation_message(
    account_id: str, domain_tag: str = Config.DEFAULT_DOMAIN_TAG
) -> str:
    """Message the wallet must sign; constant so the signature is reproducible."""
    if not account_id:
        msg = "account_id must not be empty"
        raise MalformedInput(msg)
    return f"{domain_tag} | {account_id}"


def _signature_bytes(signature: bytes | str, expected_length: int) -> bytes:
    if isinstance(signature, str):
        try:
            signature = base64.b64decode(signature, validate=True)
        except (binascii.Error, ValueError) as err:
            msg = "Signature is not valid base64"
            raise InvalidSignature(msg) from err
    if not isinstance(signature, (bytes, bytearray)):
        msg = f"Signature must be bytes or base64 text, got {type(signature).__name__}"
        raise InvalidSignature(msg)
    if len(signature) != expected_length:
        msg = f"Signature must be {expected_length} bytes, got {len(signature)}"
        raise InvalidSignature(msg)
    return bytes(signature)


def derive_keypair(
    account_id: str,
    signature: bytes | str,
    signature_length: int = Config.SIGNATURE_LENGTH,
) -> Keypair:
    """Derive the identity keypair for ``account_id`` from its wallet signature.

    Raises:
        MalformedInput: account_id is empty
        InvalidSignature: signature is not decodable or has the wrong length
    """
    if not isinstance(account_id, str) or not account_id:
        msg = "account_id must be a non-empty string"
        raise MalformedInput(msg)
    sig = _signature_bytes(signature, signature_length)

    seed = hashlib.sha256(sig).digest()
    # X25519 clamps the scalar internally
    private_key = X25519PrivateKey.from_private_bytes(seed)
    public_key = private_key.public_key().public_bytes(
        serialization.Encoding.Raw,
        serialization.PublicFormat.Raw,
    )

    logger.debug("Derived identity keypair %s", fingerprint(public_key))
    return Keypair(public_key=public_key, private_key=seed)


def derive_keypair_from_wallet(
    account_id: str,
    signer: IWalletSigner,
    domain_tag: str = Config.DEFAULT_DOMAIN_TAG,
    signature_length: int = Config.SIGNATURE_LENGTH,
) -> Keypair:
    """Ask the wallet to sign the derivation message, then derive."""
    message = key_derivation_message(account_id, domain_tag)
    signature = signer.sign(message)
    return derive_keypair(account_id, signature, signature_length)
