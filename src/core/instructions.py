"""
Assembly of unsigned Solana instructions.

This module builds the four instruction kinds the service exposes: native SOL
transfer, SPL mint initialisation, SPL mint-to and SPL transfer between
associated token accounts. Every builder is a pure function of already decoded
inputs; nothing here signs, submits or looks up ledger state.

Account ordering and the data layout of each instruction are fixed by the
target program:

    system transfer   [sender (s, w), recipient (w)]         u32 2 | u64 lamports
    initialize_mint   [mint (w), rent sysvar]                u8 0 | u8 decimals | authority | freeze option
    mint_to           [mint (w), destination ATA (w), authority (s)]   u8 7 | u64 amount
    transfer          [source ATA (w), destination ATA (w), owner (s)] u8 3 | u64 amount
"""

import struct
from typing import Any, Callable

from construct import ConstructError
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from spl.token.instructions import mint_to
from spl.token.models import InitializeMintParams, MintToParams
from spl.token.models import TransferParams as TokenTransferParams
from spl.token.instructions import transfer as token_transfer

from core.codec import encode_address, encode_instruction_data
from core.derivation import derive_associated_address
from core.pubkeys import MAX_MINT_DECIMALS, MAX_U64, RENT, TOKEN_PROGRAM
from interfaces.core import InstructionKind
from interfaces.errors import InstructionConstructionFailed, InvalidAmount, InvalidDecimals
from utils.logger import get_logger

logger = get_logger(__name__)

# Prefixes used when a builder rejects its parameters
_FAILURE_LABELS: dict[InstructionKind, str] = {
    InstructionKind.SOL_TRANSFER: "System transfer",
    InstructionKind.INITIALIZE_MINT: "Init mint",
    InstructionKind.MINT_TO: "MintTo",
    InstructionKind.TOKEN_TRANSFER: "Transfer",
}


def check_amount(amount: Any, field: str = "amount") -> int:
    """Ensure an amount is an unsigned 64-bit integer greater than zero.

    Raises:
        InvalidAmount: If the value is not an int in [1, 2**64 - 1]
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(field)
    if not 1 <= amount <= MAX_U64:
        raise InvalidAmount(field)
    return amount


def check_decimals(decimals: Any) -> int:
    """Ensure mint decimals is an integer in [0, 9].

    Raises:
        InvalidDecimals: If the value is out of range or not an int
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidDecimals()
    if not 0 <= decimals <= MAX_MINT_DECIMALS:
        raise InvalidDecimals()
    return decimals


_INITIALIZE_MINT_TAG = 0


def initialize_mint(params: InitializeMintParams) -> Instruction:
    """Pack initialize_mint with the token program's compact COption encoding.

    An absent freeze authority is a single 0 byte (35 bytes total); a present
    one is a 1 byte followed by the key (67 bytes total).
    """
    data = struct.pack("<BB", _INITIALIZE_MINT_TAG, params.decimals) + bytes(params.mint_authority)
    if params.freeze_authority is None:
        data += b"\x00"
    else:
        data += b"\x01" + bytes(params.freeze_authority)

    accounts = [
        AccountMeta(pubkey=params.mint, is_signer=False, is_writable=True),
        AccountMeta(pubkey=RENT, is_signer=False, is_writable=False),
    ]
    return Instruction(params.program_id, data, accounts)


def _build(kind: InstructionKind, builder: Callable[[Any], Instruction], params: Any) -> Instruction:
    """Run an instruction builder, mapping its rejections to a service error."""
    try:
        instruction = builder(params)
    except (ConstructError, struct.error, ValueError, OverflowError, TypeError) as e:
        raise InstructionConstructionFailed(_FAILURE_LABELS[kind], str(e)) from e

    logger.debug(
        f"Built {kind.value} instruction for program {instruction.program_id} "
        f"with {len(instruction.accounts)} accounts"
    )
    return instruction


def build_sol_transfer(sender: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    """Build a system program transfer of native SOL.

    Args:
        sender: Funding account, must sign
        recipient: Receiving account
        lamports: Amount in lamports

    Returns:
        System program transfer instruction
    """
    check_amount(lamports)
    return _build(
        InstructionKind.SOL_TRANSFER,
        transfer,
        TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports),
    )


def build_initialize_mint(
    mint: Pubkey, mint_authority: Pubkey, decimals: int, freeze_authority: Pubkey | None = None
) -> Instruction:
    """Build an SPL token initialize_mint instruction.

    Args:
        mint: Mint account to initialise
        mint_authority: Account allowed to mint new tokens
        decimals: Fractional precision of the token, 0 to 9
        freeze_authority: Optional account allowed to freeze token accounts

    Returns:
        Token program initialize_mint instruction
    """
    check_decimals(decimals)
    return _build(
        InstructionKind.INITIALIZE_MINT,
        initialize_mint,
        InitializeMintParams(
            decimals=decimals,
            program_id=TOKEN_PROGRAM,
            mint=mint,
            mint_authority=mint_authority,
            freeze_authority=freeze_authority,
        ),
    )


def build_mint_to(
    mint: Pubkey, destination_owner: Pubkey, mint_authority: Pubkey, amount: int
) -> Instruction:
    """Build an SPL mint_to into the destination owner's associated account.

    Args:
        mint: Token mint
        destination_owner: Wallet receiving the minted tokens
        mint_authority: Mint authority, must sign
        amount: Raw token amount

    Returns:
        Token program mint_to instruction
    """
    check_amount(amount)
    destination = derive_associated_address(destination_owner, mint)
    return _build(
        InstructionKind.MINT_TO,
        mint_to,
        MintToParams(
            program_id=TOKEN_PROGRAM,
            mint=mint,
            dest=destination,
            mint_authority=mint_authority,
            amount=amount,
        ),
    )


def build_token_transfer(
    mint: Pubkey, destination_owner: Pubkey, source_owner: Pubkey, amount: int
) -> Instruction:
    """Build an SPL transfer between two owners' associated token accounts.

    Args:
        mint: Token mint both accounts hold
        destination_owner: Wallet receiving the tokens
        source_owner: Wallet sending the tokens, must sign
        amount: Raw token amount

    Returns:
        Token program transfer instruction
    """
    check_amount(amount)
    source = derive_associated_address(source_owner, mint)
    destination = derive_associated_address(destination_owner, mint)
    return _build(
        InstructionKind.TOKEN_TRANSFER,
        token_transfer,
        TokenTransferParams(
            program_id=TOKEN_PROGRAM,
            source=source,
            dest=destination,
            owner=source_owner,
            amount=amount,
        ),
    )


def instruction_to_dict(instruction: Instruction) -> dict[str, Any]:
    """Convert an instruction to its wire representation.

    Account flags use camelCase keys (``isSigner``, ``isWritable``).

    Args:
        instruction: Assembled instruction

    Returns:
        Dictionary with program id, ordered accounts and base64 data
    """
    return {
        "program_id": encode_address(instruction.program_id),
        "accounts": [
            {
                "pubkey": encode_address(meta.pubkey),
                "isSigner": meta.is_signer,
                "isWritable": meta.is_writable,
            }
            for meta in instruction.accounts
        ],
        "instruction_data": encode_instruction_data(bytes(instruction.data)),
    }
