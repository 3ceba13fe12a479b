# backup.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Package list snapshots taken before anything is removed."""

import logging
import time
from collections.abc import Iterable
from pathlib import Path

from .exceptions import BackupError
from .logsetup import LOGGER_NAME

DEFAULT_BACKUP_DIR = Path("/var/tmp")
BACKUP_PREFIX = "pg-manage-firmware-backup-"

logger = logging.getLogger(LOGGER_NAME)


def write_backup(packages: Iterable[str], backup_dir: Path = DEFAULT_BACKUP_DIR) -> Path:
    """Write the list of installed firmware packages to a timestamped file.

    The file holds one package name per line, in the order given, and is meant for manual recovery with
    'xargs pkg install < file'.

    :param packages: Package names to record.
    :param backup_dir: Directory to write the backup file into. It must already exist.
    :returns: Path of the written backup file.
    :raises BackupError: If the file could not be written.
    """
    backup_file = Path(f"{backup_dir}/{BACKUP_PREFIX}{int(time.time())}.txt")

    try:
        backup_file.write_text("".join(f"{name}\n" for name in packages))
    except OSError as e:
        raise BackupError(f"Could not create backup file: {backup_file} ({e.strerror})") from e

    logger.debug(f"Created backup: {backup_file}")
    return backup_file
