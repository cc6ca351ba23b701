"""
Associated token account derivation.
"""

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from core.pubkeys import TOKEN_PROGRAM


def derive_associated_address(
    owner: Pubkey, mint: Pubkey, token_program: Pubkey = TOKEN_PROGRAM
) -> Pubkey:
    """Derive the associated token account of an owner for a mint.

    The address is the PDA of the associated token program seeded by
    ``[owner, token_program, mint]``. The account is not required to exist.

    Args:
        owner: Wallet address owning the token account
        mint: Token mint address
        token_program: Token program the account belongs to

    Returns:
        Associated token account address
    """
    return get_associated_token_address(owner, mint, token_program_id=token_program)
