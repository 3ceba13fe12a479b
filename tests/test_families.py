"""
Tests for managed firmware family matching and list normalization.
"""

import pytest

from fwmanage.families import FIRMWARE_REGEX, is_managed, normalize


class TestIsManaged:
    """Tests for is_managed()."""

    @pytest.mark.parametrize(
        "name",
        [
            "gpu-firmware-amd-kmod-navi10",
            "gpu-firmware-intel-kmod-kabylake",
            "gpu-firmware-radeon-kmod-r600",
            "gpu-firmware-kmod",
            "wifi-firmware-iwlwifi-kmod-9000",
            "wifi-firmware-rtw88-kmod",
            "bwi-firmware-kmod",
            "bwn-firmware-kmod",
            "malo-firmware-kmod",
            "intel-firmware",
            "intel-firmware-ucode",
            "bluetooth-firmware-intel",
            "broadcom-firmware",
            "rtlbt-firmware",
        ],
    )
    def test_managed(self, name):
        assert is_managed(name)

    @pytest.mark.parametrize(
        "name",
        [
            "gpu-firmware-nvidia-kmod",
            "drm-kmod",
            "bwx-firmware-kmod",
            "wifi-firmware",
            "linux-firmware",
            "py311-intel-firmware",
            "cpu-microcode-intel",
            "",
        ],
    )
    def test_not_managed(self, name):
        assert not is_managed(name)

    def test_match_is_anchored_at_start(self):
        assert not is_managed("x-wifi-firmware-ath10k-kmod")

    def test_regex_is_anchored_group(self):
        assert FIRMWARE_REGEX.startswith("^(")
        assert FIRMWARE_REGEX.endswith(")")


class TestNormalize:
    """Tests for normalize()."""

    def test_dedup_and_sort(self):
        assert normalize(["b", "a", "b", "c", "a"]) == ["a", "b", "c"]

    def test_strips_and_drops_blanks(self):
        assert normalize(["  wifi-firmware-x ", "", "   ", "intel-firmware\n"]) == [
            "intel-firmware",
            "wifi-firmware-x",
        ]

    def test_idempotent(self):
        once = normalize(["z", "y", "z", " x"])
        assert normalize(once) == once

    def test_accepts_generator(self):
        assert normalize(name for name in ("b", "a")) == ["a", "b"]

    def test_empty(self):
        assert normalize([]) == []
