# Cryptographic core: keypairs, key agreement, epoch keys, AEAD, posts, grants
from humint.core.agreement import agree as agree
from humint.core.epoch import current_epoch as current_epoch
from humint.core.epoch import derive_epoch_key as derive_epoch_key
from humint.core.epoch import derive_epoch_key_for_peer as derive_epoch_key_for_peer
from humint.core.grants import grant as grant
from humint.core.grants import ungrant as ungrant
from humint.core.keypair import Keypair as Keypair
from humint.core.keypair import derive_keypair as derive_keypair
from humint.core.keypair import derive_keypair_from_wallet as derive_keypair_from_wallet
from humint.core.keypair import key_derivation_message as key_derivation_message
from humint.core.posts import SealedPost as SealedPost
from humint.core.posts import decrypt_post as decrypt_post
from humint.core.posts import encrypt_post as encrypt_post
from humint.core.posts import unwrap_content_key as unwrap_content_key
from humint.core.posts import verify_content_hash as verify_content_hash

__all__ = [
    "Keypair",
    "SealedPost",
    "agree",
    "current_epoch",
    "decrypt_post",
    "derive_epoch_key",
    "derive_epoch_key_for_peer",
    "derive_keypair",
    "derive_keypair_from_wallet",
    "encrypt_post",
    "grant",
    "key_derivation_message",
    "ungrant",
    "unwrap_content_key",
    "verify_content_hash",
]
