# console.py
#
# Copyright (c) 2025 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Terminal output helpers: section headers, glyphs, prompts and spinners."""

import os
import sys

import click
from alive_progress import alive_bar

SECTION_WIDTH = 70


def supports_utf8() -> bool:
    """Check whether the effective locale uses UTF-8, following the LC_ALL > LC_CTYPE > LANG precedence."""
    for variable in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = os.environ.get(variable)
        if value:
            return "UTF-8" in value.upper().replace("UTF8", "UTF-8")
    return False


def glyphs() -> dict[str, str]:
    """Return the separator, check mark and arrow characters suitable for the terminal."""
    if supports_utf8():
        return dict(separator="─", check="✓", arrow="→")
    return dict(separator="-", check="*", arrow="->")


def print_section(title: str) -> None:
    """Print a blank line, the section title and a separator line underneath it."""
    click.echo()
    click.echo(title)
    click.echo(glyphs()["separator"] * SECTION_WIDTH)


def confirm(prompt: str, err: bool = False) -> bool:
    """Ask a yes/no question that defaults to no.

    An empty answer is a no. Answers click does not recognize as yes or no are rejected and the question is asked
    again.

    If the input is closed (Ctrl+D) or interrupted, the run is ended with exit code 0 since nothing has been changed
    yet at any point a prompt is shown.

    :param prompt: Question to ask, without the [y/N] suffix.
    :param err: If true, write the prompt to stderr instead of stdout.
    :returns: True if the user answered yes.
    """
    try:
        return click.confirm(prompt, default=False, err=err)
    except click.Abort:
        click.echo(err=True)
        click.echo("EOF detected. Aborted.", err=True)
        click.get_current_context().exit(0)


def spinner(title: str):
    """Return an alive_progress spinner for a blocking call, hidden when stdout is not a terminal."""
    return alive_bar(title=title, monitor=False, stats=False, disable=not sys.stdout.isatty())
