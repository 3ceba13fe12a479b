"""
Shared test fixtures: a fake pkg/fwget system so no test ever runs the real tools.
"""

import os
import subprocess
from pathlib import Path

import pytest


class FakeSystem:
    """Stands in for pkg and fwget by answering ``subprocess.run`` calls from in-memory state.

    ``fwget -n`` reports the needed packages that are not installed yet, ``fwget`` installs them.
    """

    def __init__(self):
        self.installed: list[str] = []
        self.needed: list[str] = []
        self.query_error: str | None = None
        self.remove_rc = 0
        self.check_rc = 0
        self.fwget_rc = 0
        self.dry_run_rc = 0
        self.backup_dir: Path | None = None
        self.backups_at_removal: list[Path] | None = None
        self.calls: list[list[str]] = []

    def commands(self) -> list[str]:
        return [" ".join(call[:2]) for call in self.calls]

    def run(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)

        if args[:2] == ["pkg", "query"]:
            if self.query_error is not None:
                return subprocess.CompletedProcess(args, 1, "", self.query_error)
            if not self.installed:
                return subprocess.CompletedProcess(args, 1, "", "")
            return subprocess.CompletedProcess(args, 0, "".join(f"{name}\n" for name in self.installed), "")

        if args[:2] == ["pkg", "remove"]:
            if self.backup_dir is not None:
                self.backups_at_removal = sorted(self.backup_dir.glob("pg-manage-firmware-backup-*.txt"))
            if self.remove_rc:
                return subprocess.CompletedProcess(args, self.remove_rc)
            self.installed = [name for name in self.installed if name not in args[3:]]
            return subprocess.CompletedProcess(args, 0)

        if args[:2] == ["pkg", "check"]:
            return subprocess.CompletedProcess(args, self.check_rc, b"", b"")

        if args == ["fwget", "-n"]:
            missing = [name for name in self.needed if name not in self.installed]
            output = ""
            if missing:
                output = "Needed firmware packages:\n" + "".join(f"  + {name}\n" for name in missing)
            return subprocess.CompletedProcess(args, self.dry_run_rc, output, None)

        if args == ["fwget"]:
            if self.fwget_rc:
                return subprocess.CompletedProcess(args, self.fwget_rc)
            self.installed = sorted(set(self.installed) | set(self.needed))
            return subprocess.CompletedProcess(args, 0)

        raise AssertionError(f"unexpected command: {args}")


@pytest.fixture
def fake_system(monkeypatch) -> FakeSystem:
    """Route every subprocess call to a FakeSystem."""
    system = FakeSystem()
    monkeypatch.setattr(subprocess, "run", system.run)
    return system


@pytest.fixture
def root_env(monkeypatch, fake_system: FakeSystem, tmp_path: Path) -> FakeSystem:
    """A local root console with pkg and fwget on PATH and an ASCII locale."""
    monkeypatch.setattr("fwmanage.safety.os.geteuid", lambda: 0)
    monkeypatch.setattr("fwmanage.safety.shutil.which", lambda tool: f"/usr/sbin/{tool}")
    for variable in ("SSH_TTY", "SSH_CONNECTION", "LC_ALL", "LC_CTYPE", "LOG_FILE"):
        monkeypatch.delenv(variable, raising=False)
    monkeypatch.setenv("LANG", "C")

    backup_dir = tmp_path / "backups"
    backup_dir.mkdir()
    fake_system.backup_dir = backup_dir
    return fake_system


@pytest.fixture
def cli_args(tmp_path: Path) -> list[str]:
    """Options that keep the log and backups inside the test's temporary directory."""
    return ["--log-file", str(tmp_path / "fw.log"), "--backup-dir", str(tmp_path / "backups")]


@pytest.fixture
def tool_on_path(tmp_path: Path, monkeypatch):
    """Install a real shell script under a given command name at the front of PATH.

    Returns a function taking the command name and the script body.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def install(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script

    return install
