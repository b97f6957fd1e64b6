"""
Runtime configuration for dumpview.

The only command-line argument is the TCP port. Everything else can be
tuned through environment variables:

    DUMPVIEW_HOST       interface to bind (default 127.0.0.1)
    DUMPVIEW_REFRESH    seconds between UI refresh ticks (default 0.25)
    DUMPVIEW_LOG_FILE   also write log records to this file
    DUMPVIEW_LOG_LEVEL  logging level name (default WARNING)
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Sequence

from textual.logging import TextualHandler

from dumpview.errors import ConfigError

DEFAULT_PORT = 9337
DEFAULT_HOST = "127.0.0.1"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class ViewerConfig:
    """Settings for one dumpview process."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    refresh_interval: float = 0.25
    log_file: str | None = None
    log_level: str = "WARNING"
    shutdown_timeout: float = 2.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dumpview",
        description="Receive JSON debug dumps over TCP and browse them in a terminal UI.",
    )
    parser.add_argument(
        "port",
        nargs="?",
        type=int,
        default=DEFAULT_PORT,
        help=f"TCP port to listen on (default: {DEFAULT_PORT})",
    )
    return parser


def load_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ViewerConfig:
    """Build a ViewerConfig from command-line arguments and the environment.

    Args:
        argv: Arguments without the program name; sys.argv[1:] if None.
        environ: Environment mapping; os.environ if None.

    Returns:
        The resolved configuration.

    Raises:
        ConfigError: If the port or an environment value is invalid.
        SystemExit: If argparse rejects the arguments.
    """
    env = os.environ if environ is None else environ
    args = build_parser().parse_args(argv)

    if not 0 <= args.port <= 65535:
        raise ConfigError(f"port must be between 0 and 65535, got {args.port}")

    config = ViewerConfig(port=args.port)
    config.host = env.get("DUMPVIEW_HOST", config.host) or config.host
    config.log_file = env.get("DUMPVIEW_LOG_FILE") or None

    level = env.get("DUMPVIEW_LOG_LEVEL", config.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"unknown log level: {level}")
    config.log_level = level

    refresh = env.get("DUMPVIEW_REFRESH")
    if refresh:
        try:
            config.refresh_interval = float(refresh)
        except ValueError as e:
            raise ConfigError(f"DUMPVIEW_REFRESH must be a number, got {refresh!r}") from e
        if config.refresh_interval <= 0:
            raise ConfigError("DUMPVIEW_REFRESH must be positive")

    return config


def configure_logging(config: ViewerConfig) -> logging.Logger:
    """Route dumpview log records to the Textual console and an optional file.

    The terminal belongs to the UI, so records never go to stdout. Run
    ``textual console`` in another terminal to watch them live.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger("dumpview")
    package_logger.setLevel(config.log_level)
    package_logger.handlers.clear()
    package_logger.propagate = False

    package_logger.addHandler(TextualHandler())
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(file_handler)

    return package_logger
