"""
Ed25519 keypair generation, message signing and verification.
"""

from solders.keypair import Keypair as SoldersKeypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from core.pubkeys import SEED_LENGTH
from interfaces.core import Keypair


def generate_keypair() -> Keypair:
    """Generate a new keypair from the OS random source."""
    return Keypair(SoldersKeypair())


def keypair_from_seed(seed: bytes) -> Keypair:
    """Derive a keypair deterministically from a 32-byte seed.

    Raises:
        ValueError: If the seed is not 32 bytes long
    """
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Seed must be {SEED_LENGTH} bytes, got {len(seed)}")
    return Keypair(SoldersKeypair.from_seed(bytes(seed)))


def sign(keypair: Keypair, message: bytes) -> Signature:
    """Sign an arbitrary message. Deterministic for a given key and message."""
    return keypair.inner.sign_message(message)


def verify(public: Pubkey, message: bytes, signature: Signature) -> bool:
    """Check an Ed25519 signature.

    Returns False for any signature that does not verify, including ones that
    are not valid curve points.
    """
    return signature.verify(public, message)
