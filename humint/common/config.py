"""
Configuration settings for the HUMINT crypto core.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:  # noqa: FBT001
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Central configuration class for all system settings."""

    # Protocol constants
    KEY_SIZE: int = 32  # X25519 scalars, shared secrets, AES-256 keys
    IV_SIZE: int = 12  # GCM nonce
    TAG_SIZE: int = 16  # GCM authentication tag
    SIGNATURE_LENGTH: int = 64  # ed25519 wallet signatures
    CIPHER_SUITE: str = "v1:AES-256-GCM"
    DEFAULT_DOMAIN_TAG: str = "Argus HUMINT Key Derivation v1"

    # HKDF context strings
    EPOCH_KEY_INFO: bytes = b"epoch-key"
    GRANT_SALT: bytes = b"grant"
    GRANT_INFO: bytes = b"content-key-wrap"

    def __init__(self) -> None:
        # Key derivation
        self.DOMAIN_TAG: str = os.getenv(
            "HUMINT_DOMAIN_TAG", self.DEFAULT_DOMAIN_TAG
        )

        # Session settings
        self.CACHE_KEYS: bool = _env_flag("HUMINT_CACHE_KEYS", default=True)

        # Content store
        self.STORE_DIR: Path = Path(
            os.getenv("HUMINT_STORE_DIR", str(Path.cwd() / "humint-store"))
        )
        self.STORE_URL: str | None = os.getenv("HUMINT_STORE_URL")
        self.STORE_TIMEOUT: int = int(os.getenv("HUMINT_STORE_TIMEOUT", "10"))
        self.STORE_MAX_RETRIES: int = int(
            os.getenv("HUMINT_STORE_MAX_RETRIES", "3")
        )

        # Logging
        level_name = os.getenv("HUMINT_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        self.LOG_LEVEL: int = level if isinstance(level, int) else logging.INFO
