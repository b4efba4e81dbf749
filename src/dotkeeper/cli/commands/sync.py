#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import functools

import typer

from ..core.common import _resolve_common, _run_cli
from ..core.types import InstallArgs, UninstallArgs
from ..flows.sync import run_install_command, run_uninstall_command


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Copy every file from the source directory into the target directory.\n\n"
            "Files that were changed locally are left alone unless --force is given;\n"
            "with --backup the local copy is saved before it is overwritten.\n\n"
            "Examples:\n"
            "  dotkeeper install --dry-run\n"
            "  dotkeeper install --force --backup\n"
        )
    )(install)
    app.command(
        help=(
            "Remove installed files from the target directory.\n\n"
            "When a backup exists for a file, the latest backup is put back instead.\n"
        )
    )(uninstall)


def install(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would change without touching any file.",
        rich_help_panel="Behavior",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite files that were modified locally.",
        rich_help_panel="Behavior",
    ),
    backup: bool | None = typer.Option(
        None,
        "--backup/--no-backup",
        help="Save modified files before overwriting them (default: from config, on).",
        show_default=False,
        rich_help_panel="Behavior",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Also list files that were already up to date.",
        rich_help_panel="Output",
    ),
    source: str | None = typer.Option(
        None,
        "--source",
        help="Use this source directory instead of the configured one.",
        rich_help_panel="Config",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Output",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, quiet)
    args = InstallArgs(
        config=config_value,
        source=source,
        dry_run=dry_run,
        force=force,
        backup=backup,
        verbose=verbose,
        quiet=quiet_value,
    )
    _run_cli(functools.partial(run_install_command, args), debug=debug_value)


def uninstall(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would change without touching any file.",
        rich_help_panel="Behavior",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Also remove files that were modified locally.",
        rich_help_panel="Behavior",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Also list files that were skipped.",
        rich_help_panel="Output",
    ),
    source: str | None = typer.Option(
        None,
        "--source",
        help="Use this source directory instead of the configured one.",
        rich_help_panel="Config",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Output",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, quiet)
    args = UninstallArgs(
        config=config_value,
        source=source,
        dry_run=dry_run,
        force=force,
        verbose=verbose,
        quiet=quiet_value,
    )
    _run_cli(functools.partial(run_uninstall_command, args), debug=debug_value)
