"""
Logging for the slssteam-injector CLI.

User-facing output goes through click; logging is the diagnostic
channel underneath it.  Only the ``slsinjector`` logger tree is
configured, so third-party loggers keep Python's defaults.

Console level:
    --debug → DEBUG,  -v → INFO,  -q → ERROR,
    else SLSI_LOG_LEVEL,  else WARNING.

SLSI_LOG_FILE appends a full DEBUG trace of each run to a file,
whatever the console level is.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "slsinjector"
ENV_LEVEL = "SLSI_LOG_LEVEL"
ENV_FILE = "SLSI_LOG_FILE"

# Console lines sit next to the CLI's own "ERROR:" / "WARNING:" output
_CONSOLE_FORMATS = {
    logging.DEBUG: "%(levelname)s %(name)s:%(lineno)d: %(message)s",
    logging.INFO: "%(name)s: %(message)s",
}
_CONSOLE_DEFAULT = "%(levelname)s: %(message)s"

_FILE_FORMAT = "%(asctime)s [%(process)d] %(levelname)-7s %(name)s: %(message)s"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    env = os.environ if environ is None else environ
    return _parse_level(env.get(ENV_LEVEL))


def setup_logging(level: int, log_file: str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Safe to call more than once: previous handlers are replaced.

    Raises:
        OSError: *log_file* cannot be opened.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMATS.get(level, _CONSOLE_DEFAULT)))
    logger.addHandler(console)
    logger.setLevel(level)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)
        logger.setLevel(logging.DEBUG)

    # A closed stderr (e.g. a finished test runner) must not raise
    logging.raiseExceptions = False
    return logger


def _parse_level(name: str | None) -> int:
    if not name:
        return logging.WARNING
    numeric = logging.getLevelName(name.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
