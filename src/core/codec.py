"""
Text codecs for addresses, secret keys, signatures and instruction payloads.

Addresses, secret keys and signatures travel as base58. Instruction data
travels as standard padded base64.
"""

import base64
from typing import Any

import base58
from solders.pubkey import Pubkey
from solders.signature import Signature

from core.pubkeys import PUBKEY_LENGTH, SECRET_KEY_LENGTH, SEED_LENGTH, SIGNATURE_LENGTH
from core.signing import keypair_from_seed
from interfaces.core import Keypair
from interfaces.errors import (
    InvalidAddress,
    InvalidSecretKey,
    InvalidSignatureEncoding,
    InvalidSignatureLength,
    MalformedKeypair,
)


def _b58decode(text: Any) -> bytes:
    """Strict base58 decode: str input only, no surrounding whitespace.

    Raises:
        ValueError: If the text is not valid base58
    """
    if not isinstance(text, str) or not text or text != text.strip():
        raise ValueError("not a base58 string")
    return base58.b58decode(text)


def _b58encode(raw: bytes) -> str:
    return base58.b58encode(raw).decode("ascii")


def decode_address(text: Any, field: str = "pubkey") -> Pubkey:
    """Decode a base58 public key.

    Args:
        text: Base58 encoded address
        field: Request field name reported on failure

    Returns:
        Decoded Pubkey

    Raises:
        InvalidAddress: If the text is not base58 or not 32 bytes long
    """
    try:
        raw = _b58decode(text)
    except ValueError:
        raise InvalidAddress(field, text if isinstance(text, str) else None)

    if len(raw) != PUBKEY_LENGTH:
        raise InvalidAddress(field, text)
    return Pubkey.from_bytes(raw)


def encode_address(pubkey: Pubkey) -> str:
    return str(pubkey)


def decode_secret_key(text: Any) -> Keypair:
    """Rebuild a keypair from its base58 64-byte encoding.

    The leading 32 bytes are the Ed25519 seed and the trailing 32 bytes must
    be the public key derived from it.

    Args:
        text: Base58 encoded secret || public

    Returns:
        Reconstructed keypair

    Raises:
        InvalidSecretKey: If the text is not base58 or not 64 bytes long
        MalformedKeypair: If the public half does not match the seed
    """
    try:
        raw = _b58decode(text)
    except ValueError:
        raise InvalidSecretKey()

    if len(raw) != SECRET_KEY_LENGTH:
        raise InvalidSecretKey()

    seed, public = raw[:SEED_LENGTH], raw[SEED_LENGTH:]
    try:
        keypair = keypair_from_seed(seed)
    except ValueError as e:
        raise MalformedKeypair() from e

    if bytes(keypair.public) != public:
        raise MalformedKeypair()
    return keypair


def encode_secret_key(keypair: Keypair) -> str:
    return _b58encode(keypair.to_bytes())


def decode_signature(text: Any) -> Signature:
    """Decode a base58 Ed25519 signature.

    Raises:
        InvalidSignatureEncoding: If the text is not base58
        InvalidSignatureLength: If it does not decode to 64 bytes
    """
    try:
        raw = _b58decode(text)
    except ValueError:
        raise InvalidSignatureEncoding()

    if len(raw) != SIGNATURE_LENGTH:
        raise InvalidSignatureLength(len(raw))
    return Signature.from_bytes(raw)


def encode_signature(signature: Signature) -> str:
    return _b58encode(bytes(signature))


def encode_instruction_data(data: bytes) -> str:
    """Encode an instruction payload as standard padded base64."""
    return base64.b64encode(data).decode("ascii")
