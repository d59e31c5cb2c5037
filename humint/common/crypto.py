"""Common cryptographic utilities.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from humint.common.config import Config
from humint.common.exceptions import MalformedInput


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def hkdf_sha256(
        ikm: bytes, salt: bytes, info: bytes, length: int = Config.KEY_SIZE
    ) -> bytes:
        """Extract-and-expand ``ikm`` with HKDF-SHA256."""
        return HKDF(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            info=info,
        ).derive(ikm)

    @staticmethod
    def hash_content(content: bytes) -> str:
        """SHA-256 hex digest used as the plaintext integrity commitment."""
        return hashlib.sha256(content).hexdigest()

    @staticmethod
    def constant_time_equals(a: bytes | str, b: bytes | str) -> bool:
        if isinstance(a, str):
            a = a.encode()
        if isinstance(b, str):
            b = b.encode()
        return hmac.compare_digest(a, b)

    @staticmethod
    def require_length(value: bytes, length: int, name: str) -> bytes:
        """Reject non-bytes or wrong-length buffers."""
        if not isinstance(value, (bytes, bytearray)):
            msg = f"{name} must be bytes, got {type(value).__name__}"
            raise MalformedInput(msg)
        if len(value) != length:
            msg = f"{name} must be {length} bytes, got {len(value)}"
            raise MalformedInput(msg)
        return bytes(value)

    @staticmethod
    def b64encode(data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    @staticmethod
    def b64decode(data: str, name: str = "value") -> bytes:
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as err:
            msg = f"{name} is not valid base64"
            raise MalformedInput(msg) from err

    @staticmethod
    def hex_decode(data: str, name: str = "value") -> bytes:
        try:
            return bytes.fromhex(data)
        except ValueError as err:
            msg = f"{name} is not valid hex"
            raise MalformedInput(msg) from err
