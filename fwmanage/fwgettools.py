# fwgettools.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Wrappers around fwget(8), the hardware firmware detector."""

import logging
import re
import subprocess

from .console import spinner
from .exceptions import FirmwareInstallError
from .families import normalize
from .logsetup import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# A package line in 'fwget -n' output: optional indent, a '+' or '-' marker, whitespace, then the package name.
_package_line = re.compile(r"^\s*[-+]\s+(\S+)")


class Fwget:
    """Static methods to ask fwget what firmware the hardware needs and to install it."""

    @staticmethod
    def parse_dry_run(output: str) -> list[str]:
        """Extract package names from the output of 'fwget -n'.

        Only lines starting with a '+' or '-' marker count; everything else (headers, device descriptions, blank
        lines) is ignored. Anything after the package name on the same line is ignored as well.

        :param output: Combined stdout and stderr of 'fwget -n'.
        :returns: Sorted, deduplicated list of package names.
        """
        names = list()

        for line in output.splitlines():
            match = _package_line.match(line)
            if match:
                names.append(match.group(1))

        return normalize(names)

    @staticmethod
    def needed() -> list[str]:
        """Run 'fwget -n' and return the firmware packages the current hardware requires.

        fwget can exit non-zero for reasons that don't matter here, so the output is parsed regardless.

        :returns: Sorted, deduplicated list of package names. Empty if fwget printed nothing.
        """
        logger.debug("Running fwget dry-run to detect hardware requirements...")

        try:
            with spinner("Detecting hardware"):
                result = subprocess.run(
                    ["fwget", "-n"],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    encoding="utf-8",
                    errors="replace",
                )
        except FileNotFoundError as e:
            raise FirmwareInstallError("Required command 'fwget' not found in PATH.") from e

        if result.returncode != 0:
            logger.debug(f"Warning: fwget -n returned non-zero exit code: {result.returncode}")

        if not result.stdout.strip():
            logger.debug("fwget produced no output")
            return []

        return Fwget.parse_dry_run(result.stdout)

    @staticmethod
    def install() -> None:
        """Run 'fwget' to install the firmware the hardware requires. Its output goes straight to the terminal.

        :raises FirmwareInstallError: If fwget exits non-zero.
        """
        try:
            result = subprocess.run(["fwget"])
        except FileNotFoundError as e:
            raise FirmwareInstallError("Required command 'fwget' not found in PATH.") from e

        if result.returncode != 0:
            logger.info("Error: fwget failed during installation")
            raise FirmwareInstallError(
                f"fwget exited with code {result.returncode}. Run 'fwget -v' manually for detailed information."
            )

        logger.info("fwget completed successfully")
