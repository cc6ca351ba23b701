"""
Logging utilities for the Solana instruction service.

Modules call ``get_logger(__name__)`` at import time, before the runner has
read the configuration. ``set_log_level`` therefore updates loggers that
already exist and becomes the default for any created afterwards.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers handed out by get_logger, keyed by name
_loggers: dict[str, logging.Logger] = {}

# Level applied by set_log_level; None until configured
_configured_level: int | None = None


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get or create a stdout logger with the given name.

    Args:
        name: Logger name, typically __name__
        level: Logging level, overridden by a level set through set_log_level

    Returns:
        Configured logger
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    logger.setLevel(_configured_level if _configured_level is not None else level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(_formatter())
        logger.addHandler(console_handler)

    _loggers[name] = logger
    return logger


def set_log_level(level: str | int) -> None:
    """Apply a log level to every service logger, present and future.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level

    Raises:
        ValueError: If the level name is unknown
    """
    global _configured_level

    _configured_level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(_configured_level)


def setup_file_logging(
    filename: str = "instruction_service.log", level: str | int = logging.INFO
) -> logging.FileHandler:
    """Mirror every service log record into a file.

    The handler goes on the root logger; service loggers propagate to it.

    Args:
        filename: Log file path
        level: Logging level for the file handler

    Returns:
        The attached handler, so callers can detach it
    """
    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(_resolve_level(level))
    file_handler.setFormatter(_formatter())

    logging.getLogger().addHandler(file_handler)
    return file_handler
