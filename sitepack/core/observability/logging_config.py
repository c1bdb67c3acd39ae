"""
Logging configuration — set up once by the sitepack CLI.

Library code only does ``logger = logging.getLogger(__name__)``; nothing
under ``sitepack.core`` configures handlers itself.

Level precedence:
    --debug / --verbose / --quiet  >  SITEPACK_LOG_LEVEL  >  WARNING

A log file can be added with SITEPACK_LOG_FILE (and SITEPACK_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "SITEPACK_LOG_LEVEL"
LOG_FILE_ENV = "SITEPACK_LOG_FILE"
LOG_FILE_LEVEL_ENV = "SITEPACK_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# WARNING and above: just the message
_FMT_MINIMAL = "%(message)s"

# INFO: time + logger name
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"

# DEBUG and file output: level and file:line
_FMT_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

_DATEFMT_SHORT = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    environ: Mapping[str, str],
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return environ.get(LOG_LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file to append to.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        console_fmt = logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT_SHORT)
    elif console_level <= logging.INFO:
        console_fmt = logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_SHORT)
    else:
        console_fmt = logging.Formatter(_FMT_MINIMAL)

    # ── Console (stderr, stdout is reserved for JSON output) ────
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    # ── Optional file ───────────────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAILED, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names fall back to WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
