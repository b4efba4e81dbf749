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

"""State reconciliation and versioned backup engine."""

from .api import clear_backups, install, list_backups, restore, status, uninstall
from .backups import BackupStore
from .catalog import PathCatalog, iter_catalog
from .errors import (
    BackupMissingError,
    BackupWriteError,
    ConflictError,
    DotkeeperError,
    VersionNotFoundError,
)
from .models import (
    Action,
    BackupRecord,
    DiffSummary,
    FileOutcome,
    FileState,
    InstallOptions,
    LineChange,
    ReconciliationResult,
    StatusEntry,
    StatusReport,
    UninstallOptions,
)
from .reconcile import Reconciler
from .restore import Restorer
from .state import classify, inspect_file
from .status import StatusReporter, summarize_diff

__all__ = [
    "Action",
    "BackupMissingError",
    "BackupRecord",
    "BackupStore",
    "BackupWriteError",
    "ConflictError",
    "DiffSummary",
    "DotkeeperError",
    "FileOutcome",
    "FileState",
    "InstallOptions",
    "LineChange",
    "PathCatalog",
    "Reconciler",
    "ReconciliationResult",
    "Restorer",
    "StatusEntry",
    "StatusReport",
    "StatusReporter",
    "UninstallOptions",
    "VersionNotFoundError",
    "classify",
    "clear_backups",
    "inspect_file",
    "install",
    "iter_catalog",
    "list_backups",
    "restore",
    "status",
    "summarize_diff",
    "uninstall",
]
