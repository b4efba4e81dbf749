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
from ..core.types import BackupsArgs, ClearBackupsArgs
from ..flows.backups import run_backups_command, run_clear_backups_command

_CLEAR_HELP = (
    "Delete every stored backup.\n\n"
    "Asks for confirmation unless --yes is given.\n"
)


def register(app: typer.Typer) -> None:
    app.command(help="List stored backups, oldest first.")(backups)
    app.command(name="clear-backups", help=_CLEAR_HELP)(clear_backups)
    app.command(name="reset", help=_CLEAR_HELP, hidden=True)(clear_backups)


def backups(
    ctx: typer.Context,
    file: str | None = typer.Option(
        None,
        "--file",
        help="Only list backups of this path.",
        rich_help_panel="Selection",
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
        help="Hide the summary line.",
        rich_help_panel="Output",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, quiet)
    args = BackupsArgs(config=config_value, file=file, quiet=quiet_value)
    _run_cli(functools.partial(run_backups_command, args), debug=debug_value)


def clear_backups(
    ctx: typer.Context,
    assume_yes: bool = typer.Option(
        False,
        "--yes",
        "--force",
        "-y",
        help="Skip the confirmation prompt.",
        rich_help_panel="Behavior",
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
    args = ClearBackupsArgs(config=config_value, assume_yes=assume_yes, quiet=quiet_value)
    _run_cli(functools.partial(run_clear_backups_command, args), debug=debug_value)
