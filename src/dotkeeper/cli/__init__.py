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

from .app import app as app, main as main
from .flows.backups import (
    run_backups_command as run_backups_command,
    run_clear_backups_command as run_clear_backups_command,
)
from .flows.restore import run_restore_command as run_restore_command
from .flows.status import run_status_command as run_status_command
from .flows.sync import (
    run_install_command as run_install_command,
    run_uninstall_command as run_uninstall_command,
)

__all__ = [
    "app",
    "main",
    "run_backups_command",
    "run_clear_backups_command",
    "run_install_command",
    "run_restore_command",
    "run_status_command",
    "run_uninstall_command",
]
