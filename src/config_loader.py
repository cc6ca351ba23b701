"""
Configuration loading and validation for the instruction service.
"""

import copy
import os
from typing import Any

import yaml
from dotenv import load_dotenv

import config as defaults
from utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = [
    "name",
    "server.host",
    "server.port",
    "logging.level",
]

CONFIG_VALIDATION_RULES = [
    ("server.port", int, 0, 65535, "server.port must be between 0 and 65535"),
    ("server.max_body_bytes", int, 1, float("inf"), "server.max_body_bytes must be a positive integer"),
]

# Valid values for enum-like fields
VALID_VALUES = {
    "logging.level": defaults.VALID_LOG_LEVELS,
}

# Environment variables that take precedence over the file
ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "SERVER_HOST": ("server.host", str),
    "SERVER_PORT": ("server.port", int),
    "LOG_LEVEL": ("logging.level", str),
    "LOG_FILE": ("logging.file", str),
}


def default_config() -> dict:
    """Build the configuration used when no file overrides a setting."""
    return {
        "name": "solana-instruction-service",
        "server": {
            "host": defaults.HOST,
            "port": defaults.PORT,
            "max_body_bytes": defaults.MAX_BODY_BYTES,
            "access_log": defaults.ACCESS_LOG,
        },
        "logging": {
            "level": defaults.LOG_LEVEL,
            "file": defaults.LOG_FILE,
        },
    }


def load_server_config(path: str | None = None) -> dict:
    """Load and validate the server configuration.

    Args:
        path: YAML configuration file; defaults only when None

    Returns:
        Validated configuration dictionary

    Raises:
        ValueError: If the configuration is incomplete or out of range
    """
    config = default_config()

    if path is not None:
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        env_file = file_config.get("env_file")
        if env_file:
            env_path = os.path.join(os.path.dirname(path), env_file)
            if os.path.exists(env_path):
                load_dotenv(env_path, override=True)
            else:
                load_dotenv(env_file, override=True)

        resolve_env_vars(file_config)
        merge_config(config, file_config)

    apply_env_overrides(config)
    validate_config(config)
    return config


def resolve_env_vars(config: dict) -> None:
    """Recursively resolve ${VAR} placeholders in the configuration."""
    def resolve_env(value):
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.getenv(env_var)
            if env_value is None:
                raise ValueError(f"Environment variable '{env_var}' not found")
            return env_value
        return value

    def resolve_all(d):
        for k, v in d.items():
            if isinstance(v, dict):
                resolve_all(v)
            else:
                d[k] = resolve_env(v)

    resolve_all(config)


def merge_config(base: dict, overrides: dict) -> None:
    """Deep-merge overrides into base in place."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_config(base[key], value)
        else:
            base[key] = copy.deepcopy(value)


def apply_env_overrides(config: dict) -> None:
    """Apply SERVER_HOST, SERVER_PORT, LOG_LEVEL and LOG_FILE from the environment."""
    for env_var, (path, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{env_var}' must be of type {cast.__name__}")
        set_nested_value(config, path, value)


def get_nested_value(config: dict, path: str) -> Any:
    """Get a nested value from the configuration using dot notation."""
    keys = path.split(".")
    value = config
    for key in keys:
        if not isinstance(value, dict) or key not in value:
            raise ValueError(f"Missing required config key: {path}")
        value = value[key]
    return value


def set_nested_value(config: dict, path: str, value: Any) -> None:
    """Set a nested value in the configuration using dot notation."""
    keys = path.split(".")
    target = config
    for key in keys[:-1]:
        target = target.setdefault(key, {})
    target[keys[-1]] = value


def validate_config(config: dict) -> None:
    """Validate the configuration against defined rules."""
    # Validate required fields
    for field in REQUIRED_FIELDS:
        get_nested_value(config, field)

    # Validate config rules
    for path, expected_type, min_val, max_val, error_msg in CONFIG_VALIDATION_RULES:
        try:
            value = get_nested_value(config, path)

            if isinstance(value, bool) or not isinstance(value, expected_type):
                raise ValueError(f"Type error: {error_msg}")

            if isinstance(value, (int, float)) and not (min_val <= value <= max_val):
                raise ValueError(f"Range error: {error_msg}")

        except ValueError as e:
            if str(e).startswith(("Type error:", "Range error:")):
                raise
            continue

    # Validate enum-like fields
    for path, valid_values in VALID_VALUES.items():
        try:
            value = get_nested_value(config, path)
            if value not in valid_values:
                raise ValueError(f"{path} must be one of {valid_values}")
        except ValueError as e:
            if "Missing required config key" not in str(e):
                raise

    if not isinstance(get_nested_value(config, "server.host"), str):
        raise ValueError("server.host must be a string")


def print_config_summary(config: dict) -> None:
    """Log a summary of the loaded configuration."""
    server = config.get("server", {})
    log_cfg = config.get("logging", {})

    logger.info(f"Service name: {config.get('name', 'unnamed')}")
    logger.info(f"Listening on: {server.get('host')}:{server.get('port')}")
    logger.info(f"Max body size: {server.get('max_body_bytes')} bytes")
    logger.info(f"Access log: {'enabled' if server.get('access_log') else 'disabled'}")
    logger.info(f"Log level: {log_cfg.get('level')}")
    if log_cfg.get("file"):
        logger.info(f"Log file: {log_cfg['file']}")
