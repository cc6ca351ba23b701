"""
Error taxonomy for the instruction service.

Every error here is request-scoped and recoverable: the HTTP layer turns
each one into a ``{"success": false, "error": ...}`` envelope with a 400
status. Anything outside this hierarchy is a genuine fault and propagates.
"""


class ServiceError(Exception):
    """Base class for validation and construction failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyField(ServiceError):
    """A required request field is missing or blank."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}")
        self.field = field


class InvalidAddress(ServiceError):
    """A field is not a base58 encoded 32-byte public key."""

    # Longest caller value echoed back in the message
    MAX_ECHO = 64

    def __init__(self, field: str, value: str | None = None):
        message = f"Invalid pubkey for field '{field}'"
        if value is not None:
            shown = value if len(value) <= self.MAX_ECHO else f"{value[:self.MAX_ECHO]}..."
            message = f"{message}: {shown}"
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidSecretKey(ServiceError):
    def __init__(self, message: str = "Invalid secret key"):
        super().__init__(message)


class MalformedKeypair(ServiceError):
    """The 64-byte secret decodes but is not a consistent Ed25519 keypair."""

    def __init__(self, message: str = "Failed to parse keypair"):
        super().__init__(message)


class InvalidSignatureEncoding(ServiceError):
    def __init__(self, message: str = "Invalid signature encoding"):
        super().__init__(message)


class InvalidSignatureLength(ServiceError):
    def __init__(self, length: int):
        super().__init__(f"Invalid signature format: expected 64 bytes, got {length}")
        self.length = length


class InvalidAmount(ServiceError):
    def __init__(self, field: str = "amount"):
        super().__init__(f"Field '{field}' must be an integer greater than 0")
        self.field = field


class InvalidDecimals(ServiceError):
    def __init__(self, message: str = "Decimals must be between 0 and 9"):
        super().__init__(message)


class InstructionConstructionFailed(ServiceError):
    """The underlying instruction builder rejected its parameters."""

    def __init__(self, kind: str, reason: str):
        super().__init__(f"{kind} failed: {reason}")
        self.kind = kind
        self.reason = reason


class InvalidRequestBody(ServiceError):
    def __init__(self, message: str = "Invalid JSON body"):
        super().__init__(message)
