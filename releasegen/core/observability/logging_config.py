"""
Logging configuration for the releasegen CLI.

The ``cli`` group calls :func:`configure_from_env` once, before any
command runs. Modules log through ``logging.getLogger(__name__)``.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  RELEASEGEN_LOG_LEVEL  >  WARNING

At WARNING the console shows skipped descriptors and failed writes;
INFO adds one line per generated or removed file. A second, usually
more detailed, log can go to RELEASEGEN_LOG_FILE at
RELEASEGEN_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

LOG_LEVEL_ENV = "RELEASEGEN_LOG_LEVEL"
LOG_FILE_ENV = "RELEASEGEN_LOG_FILE"
LOG_FILE_LEVEL_ENV = "RELEASEGEN_LOG_FILE_LEVEL"

# (highest level the format applies to, format, datefmt), most verbose first
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d: %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = ("%(levelname)s: %(message)s", None)

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LOG_LEVEL_ENV) or "WARNING"


def configure_from_env(level: str, environ: Mapping[str, str] | None = None) -> None:
    """Call :func:`setup_logging` with the file settings taken from *environ*."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=level,
        log_file=env.get(LOG_FILE_ENV) or None,
        log_file_level=env.get(LOG_FILE_LEVEL_ENV) or None,
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with a console and optional file handler.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file; its directory is created if missing.
        log_file_level: Level for the log file. Defaults to ``level``.
    """
    console_level = parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    # stderr keeps stdout clean for --json output
    root.addHandler(_console_handler(console_level))

    effective = console_level
    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root.addHandler(_file_handler(Path(log_file), file_level))
        effective = min(effective, file_level)

    root.setLevel(effective)
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_DEFAULT
    for threshold, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler
