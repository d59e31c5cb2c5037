"""
Interfaces and protocols for the external collaborators.
"""

from __future__ import annotations

from typing import Protocol

from humint.common.models import PostBundle


class IWalletSigner(Protocol):
    """Wallet that signs the deterministic key-derivation message.

    Returns raw signature bytes or the base64 string most wallets emit.
    """

    def sign(self, message: str) -> bytes | str: ...


class IContentStore(Protocol):
    """Opaque storage for encrypted post bundles."""

    def put(self, post_id: str, bundle: PostBundle) -> None: ...

    def get(self, post_id: str) -> PostBundle | None: ...
