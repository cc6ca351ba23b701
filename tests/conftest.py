"""
Shared pytest fixtures for the instruction service test suite.
"""

import base58
import pytest
from solders.pubkey import Pubkey

from core import signing

# RFC 8032, section 7.1, TEST 1
RFC8032_SEED = bytes.fromhex(
    "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)
RFC8032_PUBLIC = bytes.fromhex(
    "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
)
RFC8032_EMPTY_MESSAGE_SIGNATURE = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def rfc_secret_text():
    """Base58 64-byte secret (seed || public) for the RFC 8032 vector."""
    return base58.b58encode(RFC8032_SEED + RFC8032_PUBLIC).decode()


@pytest.fixture
def keypair():
    """Fresh random keypair."""
    return signing.generate_keypair()


@pytest.fixture
def alice():
    """Deterministic wallet address for Alice."""
    return signing.keypair_from_seed(bytes([1] * 32)).public


@pytest.fixture
def bob():
    """Deterministic wallet address for Bob."""
    return signing.keypair_from_seed(bytes([2] * 32)).public


@pytest.fixture
def mint():
    return Pubkey.from_string(USDC_MINT)


@pytest.fixture
def other_mint():
    return signing.keypair_from_seed(bytes([3] * 32)).public
