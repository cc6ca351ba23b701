"""
Default configuration for the Solana instruction service.

Values here are used when the YAML configuration file leaves a setting out.
"""

# HTTP listener
# Address and port the aiohttp server binds to
HOST: str = "0.0.0.0"
PORT: int = 8080
MAX_BODY_BYTES: int = 64 * 1024  # Request bodies carry a handful of short strings
ACCESS_LOG: bool = True  # Log one line per handled request


# Logging
# "DEBUG" also logs every assembled instruction
LOG_LEVEL: str = "INFO"
LOG_FILE: str | None = None  # Also write logs to this file when set


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_configuration() -> None:
    """
    Validation of the default configuration.

    Checks:
    - Type correctness
    - Value ranges
    """
    config_checks = [
        # (value, type, min_value, max_value, error_message)
        (PORT, int, 0, 65535, "PORT must be between 0 and 65535"),
        (MAX_BODY_BYTES, int, 1, float("inf"), "MAX_BODY_BYTES must be a positive integer"),
    ]

    for value, expected_type, min_val, max_val, error_msg in config_checks:
        if not isinstance(value, expected_type):
            raise ValueError(f"Type error: {error_msg}")

        if isinstance(value, (int, float)) and not (min_val <= value <= max_val):
            raise ValueError(f"Range error: {error_msg}")

    if LOG_LEVEL not in VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}")


# Validate configuration on import
validate_configuration()
