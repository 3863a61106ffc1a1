"""Logger hierarchy and handler setup shared by the CLI and the service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

ROOT_LOGGER = "webcheck"

_CONSOLE_FORMAT = "[%(component)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(component)s: %(message)s"


class _ComponentFormatter(logging.Formatter):
    """Shows ``analyzers.markup`` instead of ``webcheck.analyzers.markup``."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = ROOT_LOGGER + "."
        if record.name.startswith(prefix):
            record.component = record.name[len(prefix) :]
        else:
            record.component = record.name
        return super().format(record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``webcheck.<name>``, or the package root logger without a name."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def resolve_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags onto a logging level; ``verbose`` wins."""
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
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route ``webcheck`` records to stderr and, optionally, a log file.

    Reports are printed on stdout, so console logging always goes to stderr
    unless ``stream`` is given. The file sink records everything at debug
    level regardless of the console level. Calling this again replaces the
    handlers installed by the previous call.
    """
    console_level = resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(ROOT_LOGGER)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_ComponentFormatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    sink = logging.FileHandler(log_file, encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(_ComponentFormatter(_FILE_FORMAT))
    logger.addHandler(sink)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger", "resolve_level"]
