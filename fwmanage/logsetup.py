# logsetup.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Operation log setup.

INFO records are the operation log: they always go to the log file (when it can be opened) and, in verbose mode, are
echoed to the terminal as well. DEBUG records are verbose-only progress detail and never reach the file.
"""

import logging
from pathlib import Path

import click

LOGGER_NAME = "pg-manage-firmware"
DEFAULT_LOG_FILE = Path("/var/log/pg-manage-firmware.log")

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(LOGGER_NAME)


class ClickEchoHandler(logging.Handler):
    """Send log records to the terminal through click.

    INFO and above are printed with a timestamp on stdout, DEBUG detail is printed bare on stderr.
    """

    def __init__(self):  # noqa: D107
        super().__init__(logging.DEBUG)
        self.timestamped = logging.Formatter("[%(asctime)s] %(message)s", datefmt=_TIMESTAMP_FORMAT)
        self.bare = logging.Formatter("%(message)s")

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D102
        try:
            if record.levelno >= logging.INFO:
                click.echo(self.timestamped.format(record))
            else:
                click.echo(self.bare.format(record), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(log_file: Path, verbose: bool) -> logging.Logger:
    """Configure the tool's logger for this run, replacing any handlers from an earlier setup.

    :param log_file: Path of the operation log. If it cannot be opened, file logging is skipped.
    :param verbose: If true, also echo log records to the terminal.
    :returns: The configured logger.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    try:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # Not running as root, read-only /var/log, etc. The log is best effort.
        pass
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", datefmt=_TIMESTAMP_FORMAT))
        logger.addHandler(file_handler)

    if verbose:
        logger.addHandler(ClickEchoHandler())
    else:
        logger.addHandler(logging.NullHandler())

    return logger
