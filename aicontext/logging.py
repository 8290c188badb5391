"""Logger hierarchy and handler setup for aicontext runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "aicontext"

_CONSOLE_FORMAT = "[aicontext] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``aicontext.<name>``, or the package logger itself."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level.

    ``--verbose`` shows per-file decisions, ``--quiet`` keeps only warnings
    about skipped files and directories.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Send aicontext records to stderr and, optionally, to ``log_file``.

    The file sink always records at debug level so a quiet console run still
    leaves a full trace of the walk.
    """
    level = console_level(verbose=verbose, quiet=quiet)
    logger = get_logger()
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "console_level", "get_logger"]
