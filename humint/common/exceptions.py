"""
Custom exceptions for the HUMINT crypto core.

Authentication failures deliberately do not say whether the key was wrong
or the ciphertext was tampered with.
"""

from __future__ import annotations


class HumintError(Exception):
    """Base exception for all crypto core failures."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidSignature(HumintError):
    """Wallet signature bytes are malformed or of the wrong length."""


class InvalidPublicKey(HumintError):
    """Peer public key was rejected by X25519 validation."""


class MalformedInput(HumintError):
    """Wrong-length buffers, empty tier/epoch strings and similar."""


class AuthenticationFailed(HumintError):
    """AEAD tag did not verify."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, 403)


class SessionError(HumintError):
    """Operation requires an identity but the session is logged out."""

    def __init__(self, message: str = "No identity loaded") -> None:
        super().__init__(message, 401)


class AccessDenied(HumintError):
    """Content is visible but the caller cannot derive its key."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, 403)


class StoreError(HumintError):
    """Content store could not be reached or returned an error."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)
