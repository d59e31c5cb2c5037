"""
Source and subscriber walkthrough.

A source seals a report for the "press" tier, a subscriber with the matching
DH relationship opens it, and a one-off grant lets a third identity read the
same post without any tier access.
"""

import hashlib
import logging
import sys
from pathlib import Path

# Add the project root to the path to import humint
sys.path.insert(0, str(Path(__file__).parent.parent))

from humint import AuthenticationFailed, CryptoSession
from humint.common.decorators import access_gated
from humint.core.keypair import key_derivation_message
from humint.store import MemoryContentStore


class DemoWallet:
    """Stands in for a wallet: deterministic 64-byte signature per account."""

    def __init__(self, account_id: str):
        self.account_id = account_id

    def sign(self, message: str) -> bytes:
        return hashlib.sha512(f"{self.account_id}:{message}".encode()).digest()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)
    store = MemoryContentStore()

    source = CryptoSession()
    subscriber = CryptoSession()
    outsider = CryptoSession()
    source.login_with_wallet("source.near", DemoWallet("source.near"))
    subscriber.login_with_wallet("reader.near", DemoWallet("reader.near"))
    outsider.login_with_wallet("eve.near", DemoWallet("eve.near"))
    logger.info("Wallet signs: %s", key_derivation_message("source.near"))

    bundle = source.seal_post(
        "Operation details...", "press", subscriber.public_key_hex, epoch="2025-06"
    )
    store.put("post-1", bundle)

    stored = store.get("post-1")
    logger.info("Subscriber reads: %s", subscriber.open_post_text(stored, source.public_key_hex))

    @access_gated(raise_exception=False)
    def try_read(session: CryptoSession) -> bytes:
        return session.open_post(stored, source.public_key_hex)

    logger.info("Outsider reads: %s", try_read(outsider))

    post_grant = source.grant_post(
        stored, subscriber.public_key_hex, outsider.public_key_hex, post_id="post-1"
    )
    try:
        plaintext = outsider.open_granted_post(stored, post_grant)
        logger.info("Outsider reads via grant: %s", plaintext.decode())
    except AuthenticationFailed:
        logger.exception("Grant was not usable")

    for session in (source, subscriber, outsider):
        session.logout()


if __name__ == "__main__":
    main()
