# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for the capturectl CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by the CLI entry point.  Captured child process output
is written to the log file at DEBUG level.
"""

import logging
from pathlib import Path

LOGGER_NAME = "capturectl"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_capturectl_handler"


def setup_logging(level: int, log_file: Path | None) -> logging.Logger:
    """Configure the ``capturectl`` logger and return it.

    A ``FileHandler`` writes to *log_file*.  If the file cannot be opened
    (read-only home, missing permissions) a stderr handler limited to
    WARNING is used instead so the CLI keeps working.

    Calling this again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for old in list(logger.handlers):
        if getattr(old, _HANDLER_MARKER, False):
            logger.removeHandler(old)
            old.close()

    handler: logging.Handler
    try:
        if log_file is None:
            raise OSError("no log file configured")
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    return logger


def log_file_of(logger: logging.Logger) -> Path | None:
    """Return the file the first installed file handler writes to, if any."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None
