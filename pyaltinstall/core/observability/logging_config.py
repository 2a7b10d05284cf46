"""
Logging configuration — one verbosity decision per run.

The CLI flags are resolved once into a Verbosity. It sets the console
log level and whether apt/configure/make output is streamed to the
terminal, so the two always agree: ``--verbose`` shows INFO records and
the live build output, ``--quiet`` shows neither.

    --debug  >  --verbose  >  --quiet  >  PYALT_LOG_LEVEL  >  WARNING

PYALT_LOG_FILE adds a file handler (level PYALT_LOG_FILE_LEVEL, default
DEBUG) so a failed overnight build can be read afterwards. Records go to
stderr; the [INFO]/[SUCCESS] console lines are not log records.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

LEVEL_ENV_VAR = "PYALT_LOG_LEVEL"
FILE_ENV_VAR = "PYALT_LOG_FILE"
FILE_LEVEL_ENV_VAR = "PYALT_LOG_FILE_LEVEL"

_BRIEF_FMT = "%(levelname)s: %(message)s"
_DETAIL_FMT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Verbosity:
    """Console log level plus whether build output is shown live."""

    level: int = logging.WARNING
    stream_output: bool = False


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """``"info"`` → ``logging.INFO``; unknown or empty names give ``default``."""
    if not name:
        return default
    return logging.getLevelNamesMapping().get(name.strip().upper(), default)


def resolve_verbosity(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> Verbosity:
    env = os.environ if env is None else env
    if debug:
        return Verbosity(logging.DEBUG, stream_output=True)
    if verbose:
        return Verbosity(logging.INFO, stream_output=True)
    if quiet:
        return Verbosity(logging.ERROR)
    return Verbosity(parse_level(env.get(LEVEL_ENV_VAR)))


def configure_logging(
    verbosity: Verbosity,
    env: Mapping[str, str] | None = None,
) -> None:
    """Install the stderr handler, plus the PYALT_LOG_FILE handler if set.

    Safe to call again (the CLI callback runs once per invocation); the
    previous handlers are replaced and any log file is closed.
    """
    env = os.environ if env is None else env
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(verbosity.level)
    if verbosity.level < logging.WARNING:
        console.setFormatter(logging.Formatter(_DETAIL_FMT, datefmt=_CONSOLE_DATEFMT))
    else:
        console.setFormatter(logging.Formatter(_BRIEF_FMT))
    root.addHandler(console)

    root_level = verbosity.level
    log_file = env.get(FILE_ENV_VAR)
    if log_file:
        file_level = parse_level(env.get(FILE_LEVEL_ENV_VAR), default=logging.DEBUG)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DETAIL_FMT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
