"""
Request operations for every endpoint.

Each operation takes the decoded JSON body, validates its fields in order
and returns the ``data`` payload of a success envelope. Validation is
fail-fast: the first invalid field raises a ServiceError and nothing is
built. Field aliases accepted on the wire are resolved here so the engine
only ever sees canonical values.
"""

from typing import Any

from solders.pubkey import Pubkey

from core import codec, instructions, signing
from interfaces.errors import EmptyField, InvalidAmount, InvalidDecimals, InvalidRequestBody
from utils.logger import get_logger

logger = get_logger(__name__)


def _field(body: dict[str, Any], name: str, *aliases: str) -> Any:
    """Return the first present value among a field and its aliases."""
    for key in (name, *aliases):
        if key in body and body[key] is not None:
            return body[key]
    return None


def _required(body: dict[str, Any], name: str, *aliases: str) -> Any:
    value = _field(body, name, *aliases)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise EmptyField(name)
    return value


def _text(body: dict[str, Any], name: str, *aliases: str, allow_empty: bool = False) -> str:
    value = _field(body, name, *aliases)
    if not isinstance(value, str) or (not value and not allow_empty):
        raise EmptyField(name)
    return value


def _utf8(text: str, name: str) -> bytes:
    """Encode a text field, rejecting lone surrogates that JSON lets through."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidRequestBody(f"Field '{name}' must be valid UTF-8")


def _address(body: dict[str, Any], name: str, *aliases: str) -> Pubkey:
    return codec.decode_address(_required(body, name, *aliases), field=name)


def _amount(body: dict[str, Any], name: str = "amount") -> int:
    value = _field(body, name)
    if value is None:
        raise EmptyField(name)
    try:
        return instructions.check_amount(value, field=name)
    except InvalidAmount:
        logger.debug(f"Rejected {name}={value!r}")
        raise


def _decimals(body: dict[str, Any]) -> int:
    value = _field(body, "decimals")
    if value is None:
        raise EmptyField("decimals")
    try:
        return instructions.check_decimals(value)
    except InvalidDecimals:
        logger.debug(f"Rejected decimals={value!r}")
        raise


def hello(_body: dict[str, Any]) -> dict[str, Any]:
    return {"message": "Solana instruction service is running"}


def generate_keypair(_body: dict[str, Any]) -> dict[str, Any]:
    """POST /keypair"""
    keypair = signing.generate_keypair()
    return {
        "pubkey": codec.encode_address(keypair.public),
        "secret": codec.encode_secret_key(keypair),
    }


def create_token(body: dict[str, Any]) -> dict[str, Any]:
    """POST /token/create - initialize_mint instruction."""
    mint = _address(body, "mint")
    mint_authority = _address(body, "mintAuthority", "mint_authority")
    decimals = _decimals(body)

    ix = instructions.build_initialize_mint(mint, mint_authority, decimals)
    return instructions.instruction_to_dict(ix)


def mint_token(body: dict[str, Any]) -> dict[str, Any]:
    """POST /token/mint - mint_to into the destination owner's associated account."""
    mint = _address(body, "mint")
    destination = _address(body, "destination")
    authority = _address(body, "authority")
    amount = _amount(body)

    ix = instructions.build_mint_to(mint, destination, authority, amount)
    return instructions.instruction_to_dict(ix)


def sign_message(body: dict[str, Any]) -> dict[str, Any]:
    """POST /message/sign"""
    message = _text(body, "message")
    payload = _utf8(message, "message")
    secret = _text(body, "secret")

    keypair = codec.decode_secret_key(secret)
    signature = signing.sign(keypair, payload)
    return {
        "signature": codec.encode_signature(signature),
        "public_key": codec.encode_address(keypair.public),
        "message": message,
    }


def verify_message(body: dict[str, Any]) -> dict[str, Any]:
    """POST /message/verify"""
    message = _text(body, "message", allow_empty=True)
    payload = _utf8(message, "message")
    pubkey_text = _required(body, "pubkey", "public_key", "publicKey")
    pubkey = codec.decode_address(pubkey_text, field="pubkey")
    signature = codec.decode_signature(_required(body, "signature"))

    valid = signing.verify(pubkey, payload, signature)
    return {
        "valid": valid,
        "message": message,
        "pubkey": pubkey_text,
    }


def send_sol(body: dict[str, Any]) -> dict[str, Any]:
    """POST /send/sol - system program transfer."""
    sender = _address(body, "sender", "from")
    recipient = _address(body, "recipient", "to")
    amount = _amount(body)

    ix = instructions.build_sol_transfer(sender, recipient, amount)
    return instructions.instruction_to_dict(ix)


def send_token(body: dict[str, Any]) -> dict[str, Any]:
    """POST /send/token - SPL transfer between associated token accounts."""
    destination = _address(body, "destination")
    mint = _address(body, "mint")
    owner = _address(body, "owner")
    amount = _amount(body)

    ix = instructions.build_token_transfer(mint, destination, owner, amount)
    return instructions.instruction_to_dict(ix)
