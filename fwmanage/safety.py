# safety.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Checks that run before anything is queried or changed."""

import logging
import os
import shutil
import sys

import click

from .console import confirm
from .exceptions import PreconditionError
from .logsetup import LOGGER_NAME

REQUIRED_TOOLS = ("pkg", "fwget")

SSH_WARNING = """
┌─────────────────────────────────────────────────────────────┐
│ WARNING: SSH Session Detected                               │
├─────────────────────────────────────────────────────────────┤
│ Removing network/WiFi firmware during an SSH session may    │
│ cause connectivity loss. Recommendations:                   │
│   • Run from local console, or                              │
│   • Ensure alternative access (IPMI, physical access), or   │
│   • Verify wired connection won't be affected               │
└─────────────────────────────────────────────────────────────┘
"""

logger = logging.getLogger(LOGGER_NAME)


def require_root(prog_name: str = "pg-manage-firmware") -> None:
    """Make sure the tool runs with root privileges.

    :param prog_name: Name to show in the suggested sudo command.
    :raises PreconditionError: If the effective user is not root.
    """
    if os.geteuid() != 0:
        raise PreconditionError(f"This script requires root privileges.\nPlease run: sudo {prog_name}")


def check_tools(tools: tuple[str, ...] = REQUIRED_TOOLS) -> None:
    """Check the required external commands are available.

    The tools are only looked up on PATH, never executed: running 'fwget' without arguments would install firmware.

    :param tools: Command names to look for.
    :raises PreconditionError: If at least one command is missing. Every missing command is reported first.
    """
    missing = list()

    for tool in tools:
        if shutil.which(tool) is None:
            click.secho(f"Error: Required command '{tool}' not found in PATH.", fg="red", err=True)
            missing.append(tool)

    if missing:
        raise PreconditionError("Please ensure all required tools are installed.")

    logger.debug(f"Tool check passed: {' and '.join(tools)} are available")


def in_ssh_session() -> bool:
    """Return True if the environment looks like an SSH login."""
    return bool(os.environ.get("SSH_TTY") or os.environ.get("SSH_CONNECTION"))


def stdin_is_interactive() -> bool:
    """Return True if stdin is attached to a terminal."""
    return sys.stdin.isatty()


def warn_ssh() -> None:
    """Warn about running over SSH and ask whether to continue.

    Removing WiFi or NIC firmware can drop the very connection the tool is running over. Without a terminal to ask
    on, running over SSH is refused outright. Declining the prompt ends the run with exit code 0.

    :raises PreconditionError: If running over SSH without an interactive stdin.
    """
    if not in_ssh_session():
        return

    if not stdin_is_interactive():
        raise PreconditionError(
            "Running over SSH in non-interactive mode.\n"
            "This is too dangerous as network firmware removal may cut connectivity.\n"
            "Please run from an interactive SSH session or local console."
        )

    click.echo(SSH_WARNING, err=True)

    if confirm("Continue anyway?", err=True):
        logger.info("User chose to continue despite SSH warning")
        click.echo(err=True)
        return

    click.echo("Aborted.", err=True)
    logger.info("User aborted due to SSH warning")
    click.get_current_context().exit(0)
