"""Logging setup for the schemamold command line."""

import logging
import sys

LOG_LEVELS = {
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(log_level: str = "warning", verbose: bool = False, debug: bool = False) -> int:
    """Command line flags win over the configured level."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return LOG_LEVELS.get(log_level, logging.WARNING)


def configure_logging(level: int = logging.WARNING) -> None:
    """Send log records to stderr so stdout stays clean for documents."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    root.addHandler(handler)
