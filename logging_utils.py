"""Shared logging configuration for the clipocr CLI and web service."""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_CHOICES: Iterable[str] = tuple(LOG_LEVELS.keys())

# Fallback when no flag is given, e.g. CLIPOCR_LOG_LEVEL=debug
LOG_LEVEL_ENV_VAR = "CLIPOCR_LOG_LEVEL"

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("PIL", "easyocr", "werkzeug")


def add_logging_args(parser) -> None:
    """Add standard logging options to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help=f"Set log verbosity (default: ${LOG_LEVEL_ENV_VAR} or info)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v shows per-step preprocessing timings)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Reduce log verbosity (use -qq for errors only)",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Resolve a numeric log level from explicit flags, modifiers, or the environment."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = verbose - quiet
    if offset == 0:
        env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().lower()
        if env_level in LOG_LEVELS:
            return LOG_LEVELS[env_level]
        return logging.INFO
    if offset >= 1:
        return logging.DEBUG
    if offset == -1:
        return logging.WARNING
    return logging.ERROR


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging and return the active level.

    Logs go to stderr so `clipocr run` can print recognized text on stdout.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    root_logger = logging.getLogger()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    return level
