"""
Command-line entry point for the Solana instruction service.
"""

import argparse
import asyncio

import uvloop

from api.server import APIServer
from config_loader import (
    load_server_config,
    print_config_summary,
    set_nested_value,
    validate_config,
)
from utils.logger import get_logger, set_log_level, setup_file_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Serve unsigned Solana instructions and Ed25519 helpers over HTTP."
    )
    parser.add_argument(
        "--config", type=str, help="Path to a YAML configuration file"
    )
    parser.add_argument(
        "--host", type=str, help="Bind address (overrides the configuration file)"
    )
    parser.add_argument(
        "--port", type=int, help="Bind port (overrides the configuration file)"
    )
    parser.add_argument(
        "--log-file", type=str, help="Also write logs to this file"
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    """Load the configuration, preferring command line args over the file."""
    cfg = load_server_config(args.config)

    if args.host is not None:
        set_nested_value(cfg, "server.host", args.host)
    if args.port is not None:
        set_nested_value(cfg, "server.port", args.port)
    if args.log_file is not None:
        set_nested_value(cfg, "logging.file", args.log_file)

    validate_config(cfg)
    return cfg


def setup_logging(cfg: dict) -> None:
    level = cfg["logging"]["level"]
    set_log_level(level)

    log_file = cfg["logging"].get("file")
    if log_file:
        setup_file_logging(log_file, level)


async def serve(cfg: dict) -> None:
    """Run the HTTP API until cancelled."""
    api = APIServer(cfg)
    await api.start()
    try:
        await asyncio.Event().wait()
    finally:
        await api.stop()


def main() -> None:
    args = parse_args()

    try:
        cfg = build_config(args)
    except (OSError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        raise SystemExit(1)

    setup_logging(cfg)
    print_config_summary(cfg)

    try:
        uvloop.run(serve(cfg))
    except KeyboardInterrupt:
        logger.info("Service stopped by user")


if __name__ == "__main__":
    main()
