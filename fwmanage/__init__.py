# __init__.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Helpers for pg-manage-firmware. Broken out here to keep the main script from being too complex."""

from .backup import write_backup
from .exceptions import (
    BackupError,
    FirmwareInstallError,
    FirmwareManagerError,
    PackageQueryError,
    PackageRemoveError,
    PreconditionError,
)
from .families import FIRMWARE_FAMILIES, FIRMWARE_PATTERNS, is_managed, normalize
from .fwgettools import Fwget
from .pkgtools import Pkg

__version__ = "1.0.0"

__all__ = [
    "FIRMWARE_FAMILIES",
    "FIRMWARE_PATTERNS",
    "BackupError",
    "FirmwareInstallError",
    "FirmwareManagerError",
    "Fwget",
    "PackageQueryError",
    "PackageRemoveError",
    "Pkg",
    "PreconditionError",
    "is_managed",
    "normalize",
    "write_backup",
]
