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
from ..core.types import StatusArgs
from ..flows.status import run_status_command


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Show how each source file compares with the target directory.\n\n"
            "States: installed, missing, modified, untracked.\n"
            "With --verbose, modified files include a short line diff.\n"
        )
    )(status)


def status(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show line differences for modified files.",
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
        help="Hide the summary line.",
        rich_help_panel="Output",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, quiet)
    args = StatusArgs(config=config_value, source=source, verbose=verbose, quiet=quiet_value)
    _run_cli(functools.partial(run_status_command, args), debug=debug_value)
