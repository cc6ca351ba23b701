"""
System addresses and constants for Solana instruction construction.
These are the fixed program ids and sysvars referenced by the instructions
this service assembles.
"""

from typing import Final

from solders.pubkey import Pubkey

# Constants
PUBKEY_LENGTH: Final[int] = 32
SECRET_KEY_LENGTH: Final[int] = 64
SEED_LENGTH: Final[int] = 32
SIGNATURE_LENGTH: Final[int] = 64

MAX_U64: Final[int] = 2**64 - 1
MAX_MINT_DECIMALS: Final[int] = 9

# Core system programs
SYSTEM_PROGRAM: Final[Pubkey] = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
ASSOCIATED_TOKEN_PROGRAM: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)

# System accounts
RENT: Final[Pubkey] = Pubkey.from_string(
    "SysvarRent111111111111111111111111111111111"
)
