"""
Core types shared by the instruction engine and the HTTP layer.

This module defines the request-scoped keypair wrapper, the instruction kinds
the service can assemble and the single response envelope every endpoint
returns.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from solders.keypair import Keypair as SoldersKeypair
from solders.pubkey import Pubkey

from interfaces.errors import ServiceError

T = TypeVar("T")


class InstructionKind(Enum):
    """Instruction kinds supported by the assembler."""
    SOL_TRANSFER = "sol_transfer"
    INITIALIZE_MINT = "initialize_mint"
    MINT_TO = "mint_to"
    TOKEN_TRANSFER = "token_transfer"


@dataclass(frozen=True)
class Keypair:
    """Ed25519 keypair that lives for the duration of one request."""
    inner: SoldersKeypair

    @property
    def public(self) -> Pubkey:
        """Get the public key."""
        return self.inner.pubkey()

    @property
    def secret(self) -> bytes:
        """Get the 32-byte secret seed."""
        return self.inner.secret()

    def to_bytes(self) -> bytes:
        """Get the 64-byte wire encoding (secret || public)."""
        return bytes(self.inner)

    def __repr__(self) -> str:
        return f"Keypair({self.public})"


@dataclass
class ApiResponse(Generic[T]):
    """Uniform success/error envelope returned by every endpoint."""
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ServiceError | str) -> "ApiResponse[T]":
        message = error.message if isinstance(error, ServiceError) else error
        return cls(success=False, error=message)

    @property
    def status(self) -> int:
        """HTTP status matching the envelope."""
        return 200 if self.success else 400

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns:
            ``{"success": true, "data": ...}`` or ``{"success": false, "error": ...}``
        """
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}
