# families.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Firmware package families that this tool prunes and reinstalls."""

import re
from collections.abc import Iterable

# Each pattern is matched against the start of a package name.
FIRMWARE_FAMILIES: tuple[tuple[str, str], ...] = (
    ("GPU firmware kmods (AMD, Intel, Radeon)", r"gpu-firmware-(amd|intel|radeon)-kmod"),
    ("Generic GPU firmware", r"gpu-firmware-kmod"),
    ("WiFi firmware", r"wifi-firmware-"),
    ("Broadcom WiFi (bwi, bwn)", r"bw[in]-firmware-kmod"),
    ("Marvell WiFi", r"malo-firmware-kmod"),
    ("Intel firmware", r"intel-firmware"),
    ("Bluetooth and Broadcom firmware", r"b(luetooth|roadcom)-firmware"),
    ("Realtek Bluetooth firmware", r"rtlbt-firmware"),
)

FIRMWARE_PATTERNS = "|".join(pattern for _, pattern in FIRMWARE_FAMILIES)

# Anchored form handed to 'pkg query -x' and used for local filtering.
FIRMWARE_REGEX = f"^({FIRMWARE_PATTERNS})"

_firmware_re = re.compile(FIRMWARE_REGEX)


def is_managed(name: str) -> bool:
    """Return True if the package name belongs to a managed firmware family."""
    return _firmware_re.match(name) is not None


def normalize(names: Iterable[str]) -> list[str]:
    """Strip, drop empty entries, deduplicate and sort a list of package names.

    :param names: Package names in any order, possibly repeated or padded with whitespace.
    :returns: Sorted list of unique names. Running it on its own output returns the same list.
    """
    return sorted({name.strip() for name in names if name and name.strip()})
