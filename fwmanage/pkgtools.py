# pkgtools.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Wrappers around the FreeBSD package manager, pkg(8)."""

import logging
import subprocess
from collections.abc import Iterable

from .console import spinner
from .exceptions import FirmwareManagerError, PackageQueryError, PackageRemoveError, PreconditionError
from .families import FIRMWARE_REGEX, is_managed, normalize
from .logsetup import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class Pkg:
    """Static methods that query and modify installed packages through pkg."""

    @staticmethod
    def __run(args: list[str], error: type[FirmwareManagerError], **kwargs) -> subprocess.CompletedProcess:
        """Run a pkg command, turning a missing pkg binary into the given error type."""
        try:
            return subprocess.run(args, **kwargs)
        except FileNotFoundError as e:
            raise error(f"Required command '{args[0]}' not found in PATH.") from e

    @staticmethod
    def query_installed() -> list[str]:
        """List installed packages that belong to a managed firmware family.

        'pkg query -x' exits non-zero when nothing matches, which is not an error here.

        :returns: Sorted, deduplicated list of installed managed firmware package names.
        :raises PackageQueryError: If pkg fails for any other reason.
        """
        logger.debug("Querying installed firmware packages...")

        with spinner("Querying installed packages"):
            result = Pkg.__run(
                ["pkg", "query", "-x", "%n", FIRMWARE_REGEX],
                PackageQueryError,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )

        if result.returncode != 0:
            output = f"{result.stdout}{result.stderr}".strip()
            if not output or "no packages" in output.lower():
                logger.debug("No matching firmware packages found")
                return []
            raise PackageQueryError(f"pkg query failed: {output}")

        # Anything pkg prints that is not a managed firmware name (warnings, notices) is dropped.
        return normalize(name for name in result.stdout.splitlines() if is_managed(name.strip()))

    @staticmethod
    def remove(packages: Iterable[str]) -> None:
        """Remove the given packages without prompting. pkg's own output goes straight to the terminal.

        :param packages: Package names to remove. Nothing is run if the list is empty.
        :raises PackageRemoveError: If pkg exits non-zero.
        """
        names = normalize(packages)
        if not names:
            return

        logger.debug(f"Removing {len(names)} package(s)...")
        logger.info(f"Removing packages: {' '.join(names)}")

        result = Pkg.__run(["pkg", "remove", "-y", *names], PackageRemoveError)

        if result.returncode != 0:
            logger.info("Error: Package removal failed")
            raise PackageRemoveError(f"Failed to remove packages (pkg exited with code {result.returncode})")

        logger.info(f"Successfully removed {len(names)} package(s)")

    @staticmethod
    def check_database() -> bool:
        """Run 'pkg check -d' to look for missing dependencies.

        :returns: True if the package database is consistent.
        """
        logger.debug("Verifying package database integrity...")

        with spinner("Checking package database"):
            result = Pkg.__run(["pkg", "check", "-d"], PreconditionError, capture_output=True)

        if result.returncode != 0:
            logger.info("Package database verification failed")
            return False

        logger.debug("Package database verification passed")
        return True
