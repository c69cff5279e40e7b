"""Logging setup shared by the autoipc CLI and orchestrator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

ROOT_LOGGER = "autoipc"
CONSOLE_FORMAT = "[autoipc] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``autoipc.<name>``, or the package logger itself when ``name`` is empty."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optionally file) handlers on the package logger.

    Repeated calls replace previously installed handlers, so running several
    commands in one process never duplicates output.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [
        _with_format(logging.StreamHandler(), console_level, CONSOLE_FORMAT)
    ]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        # The file sink always records debug output, whatever the console shows.
        handlers.append(
            _with_format(logging.FileHandler(log_path, encoding="utf-8"), logging.DEBUG, FILE_FORMAT)
        )

    logger = get_logger()
    logger.propagate = False
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(min(handler.level for handler in handlers))
    return logger


def _with_format(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def log_channel_summary(
    logger: logging.Logger, verb: str, per_file: Iterable[Tuple[str, int]]
) -> int:
    """Log a headline plus one `N channel(s) from <path>` line per schema module.

    Returns the total channel count.
    """
    rows = list(per_file)
    total = sum(count for _, count in rows)
    logger.info("%s %d channel(s) from %d schema module(s)", verb, total, len(rows))
    for relative_path, count in rows:
        logger.info("  %d channel(s) from %s", count, relative_path)
    return total


__all__ = ["configure_logging", "get_logger", "log_channel_summary"]
