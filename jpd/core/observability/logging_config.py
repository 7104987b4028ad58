"""
Logging configuration for the jpd entrypoint.

jpd's own output is the spawned manager's output, so log records are
kept out of its way: everything goes to stderr, and at the default
level only warnings (a lockfile naming a missing manager, a failed
hash write) are shown, prefixed with ``jpd:``.

    --debug      DEBUG, records carry logger name and line
    --verbose    INFO, every resolver decision and spawned command
    --quiet      ERROR
    (none)       JPD_LOG_LEVEL, else WARNING

JPD_LOG_FILE adds a file handler; JPD_LOG_FILE_LEVEL sets its level
independently, so a quiet terminal can still keep a DEBUG trail.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

_CONSOLE_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("jpd [%(name)s] %(message)s", None),
}
_CONSOLE_DEFAULT = ("jpd: %(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Set up logging from the CLI switches and the JPD_LOG_* variables.

    Returns the console level that was applied.
    """
    env = os.environ if environ is None else environ
    level = resolve_level(debug, verbose, quiet, env.get("JPD_LOG_LEVEL"))
    setup_logging(level, env.get("JPD_LOG_FILE"), env.get("JPD_LOG_FILE_LEVEL"))
    return level


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> int:
    """Console level: the loudest switch wins, then the env var, then WARNING."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _parse_level(env_level)


def setup_logging(
    level: int = logging.WARNING,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root handlers with jpd's stderr handler (and optional file)."""
    root = logging.getLogger()
    root.handlers.clear()

    fmt, datefmt = _CONSOLE_FORMATS.get(level, _CONSOLE_DEFAULT)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    root.addHandler(console)

    root_level = level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(level, file_level)

    root.setLevel(root_level)


def _parse_level(name: str | None) -> int:
    """``"info"`` → ``logging.INFO``; unknown or empty names are WARNING."""
    if not name:
        return logging.WARNING
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.WARNING
