# exceptions.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Errors raised while managing firmware.

All of them are click exceptions, so an uncaught one is printed as ``Error: <message>`` and the tool exits 1.
"""

import click


class FirmwareManagerError(click.ClickException):
    """Base class for every failure the tool reports to the user."""

    exit_code = 1


class PreconditionError(FirmwareManagerError):
    """The environment is not safe or not able to run the tool."""


class PackageQueryError(FirmwareManagerError):
    """'pkg query' failed for a reason other than finding no packages."""


class PackageRemoveError(FirmwareManagerError):
    """'pkg remove' exited non-zero."""


class FirmwareInstallError(FirmwareManagerError):
    """'fwget' exited non-zero while installing firmware."""


class BackupError(FirmwareManagerError):
    """The package list backup could not be written."""
