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

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

VERSION_FORMAT = "%Y%m%dT%H%M%S%fZ"


class FileState(str, Enum):
    MISSING = "missing"
    INSTALLED = "installed"
    MODIFIED = "modified"
    UNTRACKED = "untracked"


class Action(str, Enum):
    SKIP = "skip"
    COPY = "copy"
    OVERWRITE = "overwrite"
    BACKUP_OVERWRITE = "backup-overwrite"
    CONFLICT = "conflict"
    REMOVE = "remove"
    RESTORE = "restore"


@dataclass(frozen=True)
class BackupRecord:
    relative_path: str
    timestamp: datetime
    sha256: str
    blob_path: Path
    size: int = 0

    @property
    def version(self) -> str:
        return format_version(self.timestamp)


@dataclass(frozen=True)
class InstallOptions:
    dry_run: bool = False
    force: bool = False
    backup: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class UninstallOptions:
    dry_run: bool = False
    force: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class FileOutcome:
    path: str
    action: Action
    previous_state: FileState | None
    new_state: FileState | None
    error: Exception | None = None
    note: str | None = None
    backup: BackupRecord | None = None
    data_loss: bool = False

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def changed(self) -> bool:
        return not self.failed and self.action not in (Action.SKIP, Action.CONFLICT)


@dataclass(frozen=True)
class ReconciliationResult:
    operation: str
    outcomes: tuple[FileOutcome, ...] = ()
    dry_run: bool = False

    @property
    def failures(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.failed)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def counts(self) -> dict[str, int]:
        """Count outcomes per action; failed outcomes are counted as ``failed``."""
        counter: Counter[str] = Counter()
        for outcome in self.outcomes:
            if outcome.failed and outcome.action is not Action.CONFLICT:
                counter["failed"] += 1
            else:
                counter[outcome.action.value] += 1
        return dict(counter)

    def outcome_for(self, path: str) -> FileOutcome | None:
        for outcome in self.outcomes:
            if outcome.path == path:
                return outcome
        return None


@dataclass(frozen=True)
class LineChange:
    line: int
    source: str | None
    target: str | None


@dataclass(frozen=True)
class DiffSummary:
    source_lines: int
    target_lines: int
    changes: tuple[LineChange, ...] = ()
    binary: bool = False


@dataclass(frozen=True)
class StatusEntry:
    path: str
    state: FileState
    diff: DiffSummary | None = None
    matches_backup: bool = False
    note: str | None = None


@dataclass(frozen=True)
class StatusReport:
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    def counts(self) -> dict[FileState, int]:
        counter: Counter[FileState] = Counter(entry.state for entry in self.entries)
        return {state: counter.get(state, 0) for state in FileState}


def format_version(timestamp: datetime) -> str:
    return timestamp.astimezone(timezone.utc).strftime(VERSION_FORMAT)


def parse_version(version: str) -> datetime:
    return datetime.strptime(version, VERSION_FORMAT).replace(tzinfo=timezone.utc)


def group_by_path(records: Sequence[BackupRecord]) -> dict[str, list[BackupRecord]]:
    grouped: dict[str, list[BackupRecord]] = {}
    for record in records:
        grouped.setdefault(record.relative_path, []).append(record)
    return grouped
