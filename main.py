#!/usr/bin/env python3
# main.py
#
# Copyright (c) 2025 - 2026 Michael Johnson
# All rights reserved.
#
# SPDX-License-Identifier: BSD-2-Clause
#
# Licensed under the BSD 2-Clause "Simplified" License

"""Optimize the firmware installed on a PGSD, GhostBSD or FreeBSD system.

This tool asks fwget which firmware the current hardware needs, removes every installed package from the managed
firmware families, and then lets fwget reinstall only what is actually required. A backup of the removed package list
is written before anything is changed.
"""

from pathlib import Path

import click

from fwmanage import (
    FIRMWARE_FAMILIES,
    FirmwareManagerError,
    Fwget,
    Pkg,
    __version__,
    write_backup,
)
from fwmanage.backup import BACKUP_PREFIX, DEFAULT_BACKUP_DIR
from fwmanage.console import confirm, glyphs, print_section
from fwmanage.logsetup import DEFAULT_LOG_FILE, setup_logging
from fwmanage.safety import check_tools, require_root, warn_ssh

PROG_NAME = "pg-manage-firmware"

EPILOG = f"""\b
Without options, this tool will:
  1. Query fwget to identify hardware-required firmware
  2. List currently installed firmware from managed families
  3. Prompt for confirmation
  4. Create backup of package list
  5. Remove managed firmware packages
  6. Run fwget to install only hardware-required firmware
  7. Verify installation success

\b
Managed families:
{chr(10).join(f"  {pattern}  ({label})" for label, pattern in FIRMWARE_FAMILIES)}

\b
Examples:
  {PROG_NAME} --dry-run         # Preview changes without modification
  sudo {PROG_NAME}              # Execute firmware optimization
  sudo {PROG_NAME} --verbose    # Run with detailed logging

\b
Files:
  {DEFAULT_LOG_FILE}    Operation log (when writable)
  {DEFAULT_BACKUP_DIR}/{BACKUP_PREFIX}*.txt    Package backups
"""


class FirmwareCommand(click.Command):
    """A click command that exits with code 1 on usage errors instead of click's default of 2."""

    def parse_args(self, ctx, args):  # noqa: D102
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def __report_needed(log) -> list[str]:
    """Show the firmware fwget says the hardware needs.

    :param log: Operation logger
    :returns: List of needed firmware packages
    """
    print_section("Step 1: Hardware Firmware Requirements (fwget analysis)")

    needed = Fwget.needed()

    if needed:
        click.echo("\n".join(needed))
        click.echo()
        click.echo(f"{glyphs()['arrow']} {len(needed)} firmware package(s) needed for current hardware")
        log.info(f"Hardware requires {len(needed)} firmware package(s)")
    else:
        click.echo("No firmware requirements detected (or fwget produced no output)")
        log.info("No firmware requirements detected")

    return needed


def __install_only(log, needed: list[str], dry_run: bool) -> None:
    """Handle a system with no managed firmware installed: install what is needed, if anything.

    :param log: Operation logger
    :param needed: Firmware packages the hardware needs
    :param dry_run: If true, only report what would be done
    """
    check = glyphs()["check"]

    if not needed:
        print_section(f"{check} No Firmware Management Needed")
        click.echo("System has no firmware requirements and no managed firmware installed.")
        log.info("No action needed - system has no firmware requirements")
        return

    if dry_run:
        click.echo("[DRY RUN] Would run: fwget")
        log.info("Dry run: would install firmware")
        return

    click.echo("Running fwget to install required firmware...")
    print_section("Installing Firmware")
    log.info("Installing firmware via fwget")

    try:
        Fwget.install()
    except (FirmwareManagerError, KeyboardInterrupt, click.Abort):
        __report_failure(None)
        raise

    print_section(f"{check} Complete")
    log.info("Firmware installation completed successfully")


def __print_plan(installed_count: int, dry_run: bool) -> None:
    """Describe the actions that follow Step 2."""
    print_section("Step 3: Planned Actions")

    if dry_run:
        click.echo(
            "[DRY RUN MODE - No changes will be made]\n"
            "\n"
            "Would execute:\n"
            "  1. Create backup of current package list\n"
            f"  2. Remove {installed_count} firmware package(s)\n"
            "  3. Verify package database integrity\n"
            "  4. Run 'fwget' to reinstall hardware-required firmware\n"
            "  5. Verify firmware installation\n"
            "\n"
            "To apply these changes, run without --dry-run flag."
        )
    else:
        click.echo(
            "This will:\n"
            "  1. Create backup of current package list\n"
            f"  2. Remove {installed_count} installed firmware package(s) listed above\n"
            "  3. Run 'fwget' to reinstall only hardware-required firmware\n"
            "  4. Result: Smaller footprint, only necessary firmware installed\n"
        )


def __report_failure(backup_file: Path | None) -> None:
    """Tell the user the system may be half-changed, and where the backup is."""
    click.echo(err=True)
    click.echo("Your system state may have changed. Consider running 'pkg check -d' to verify.", err=True)
    if backup_file is not None and backup_file.is_file():
        click.echo(f"Package list backup available at: {backup_file}", err=True)


def __optimize(log, installed: list[str], backup_dir: Path) -> None:
    """Back up, remove and reinstall firmware, then verify and summarize.

    :param log: Operation logger
    :param installed: Managed firmware packages currently installed
    :param backup_dir: Directory to write the package list backup into
    """
    arrow = glyphs()["arrow"]
    backup_file = None

    try:
        print_section("Creating Backup")
        backup_file = write_backup(installed, backup_dir)
        click.echo(f"Backup created: {backup_file}")

        print_section("Step 4: Removing Managed Firmware Packages")
        Pkg.remove(installed)
        click.echo()
        click.echo(f"{arrow} Successfully removed {len(installed)} package(s)")

        if not Pkg.check_database():
            click.echo("Warning: Package database inconsistency detected", err=True)
            click.echo("You may want to run 'pkg check -d' manually to diagnose", err=True)

        print_section("Step 5: Installing Hardware-Required Firmware")
        log.info("Running fwget to install required firmware")
        Fwget.install()

        print_section("Step 6: Verifying Installation")
        still_needed = Fwget.needed()

        if still_needed:
            click.echo("Warning: fwget reports some firmware still needed:", err=True)
            click.echo("\n".join(still_needed), err=True)
            click.echo()
            click.echo("This may be normal if the firmware requires a reboot to activate.", err=True)
            log.info(f"Warning: {len(still_needed)} firmware package(s) still reported as needed")
        else:
            log.info("All required firmware successfully installed")

        print_section(f"{glyphs()['check']} Firmware Optimization Complete")
        final = Pkg.query_installed()
    except (FirmwareManagerError, KeyboardInterrupt, click.Abort):
        __report_failure(backup_file)
        raise

    click.echo(
        "\n"
        "Summary:\n"
        f"  Before: {len(installed)} managed firmware package(s)\n"
        f"  After:  {len(final)} managed firmware package(s)\n"
        f"  Backup: {backup_file}\n"
        "\n"
        "Your system now has only hardware-required firmware installed.\n"
    )

    log.info(f"Optimization complete: {len(installed)} -> {len(final)} packages")
    log.info(f"{'=' * 20} {PROG_NAME} completed successfully {'=' * 20}")


@click.command(
    cls=FirmwareCommand,
    context_settings=dict(help_option_names=["-h", "--help"]),
    epilog=EPILOG,
)
@click.version_option(__version__, prog_name=PROG_NAME)
@click.option("--dry-run", is_flag=True, help="Show what would be changed without modifying the system.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output and logging.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_FILE,
    envvar="LOG_FILE",
    show_default=True,
    help="Operation log. Skipped silently if it cannot be written.",
)
@click.option(
    "--backup-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_BACKUP_DIR,
    show_default=True,
    help="Directory for the package list backup written before removal.",
)
def main(dry_run, verbose, log_file, backup_dir):
    """Remove unused firmware packages and reinstall only what the hardware requires."""
    log = setup_logging(log_file, verbose)
    log.info(f"{'=' * 20} {PROG_NAME} v{__version__} started {'=' * 20}")
    log.info(f"Options: DRY_RUN={int(dry_run)} VERBOSE={int(verbose)}")

    require_root(PROG_NAME)
    check_tools()
    warn_ssh()

    needed = __report_needed(log)

    print_section("Step 2: Currently Installed Managed Firmware")
    installed = Pkg.query_installed()

    if not installed:
        click.echo("No managed firmware packages currently installed.")
        click.echo()
        log.info("No managed firmware packages installed")
        __install_only(log, needed, dry_run)
        return

    click.echo("\n".join(installed))
    click.echo()
    click.echo(f"{glyphs()['arrow']} {len(installed)} managed firmware package(s) currently installed")
    log.info(f"Found {len(installed)} managed firmware package(s) installed")

    __print_plan(len(installed), dry_run)

    if dry_run:
        log.info("Dry run completed - no changes made")
        return

    if not confirm("Proceed with firmware optimization?"):
        click.echo("Aborted. No changes made.")
        log.info("User aborted operation")
        return

    log.info("User confirmed - proceeding with firmware optimization")
    __optimize(log, installed, backup_dir)


if __name__ == "__main__":
    main(prog_name=PROG_NAME)
