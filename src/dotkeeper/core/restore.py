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

from collections.abc import Callable
from pathlib import Path

from .backups import BackupStore
from .errors import BackupMissingError, DotkeeperError
from .fileops import atomic_write_bytes, file_mode, is_regular_file, sha256_file
from .models import Action, BackupRecord, FileOutcome, FileState, ReconciliationResult
from .validation import normalize_relative_path


class Restorer:
    """Apply backup records to the target directory.

    Restores are move-like by default: the applied record is deleted once the
    target holds its content. With ``keep_backup`` the record is left in place.
    Content about to be overwritten is captured first unless it already
    matches the record being restored.
    """

    def __init__(
        self,
        store: BackupStore,
        target_root: str | Path,
        *,
        source_root: str | Path | None = None,
    ) -> None:
        self.store = store
        self.target_root = Path(target_root).expanduser()
        self.source_root = Path(source_root).expanduser() if source_root is not None else None

    def restore(
        self,
        relative_path: str | None = None,
        version: str | None = None,
        *,
        keep_backup: bool = False,
        dry_run: bool = False,
        backup_current: bool = True,
        on_outcome: Callable[[FileOutcome], None] | None = None,
    ) -> ReconciliationResult:
        if relative_path is None:
            if version is not None and version.strip().lower() != "latest":
                raise ValueError("a backup version can only be selected together with a file")
            paths = self.store.paths()
        else:
            paths = [normalize_relative_path(relative_path, label="file", allow_undecodable=True)]

        outcomes: list[FileOutcome] = []
        for path in paths:
            outcome = self._restore_one(
                path,
                version,
                keep_backup=keep_backup,
                dry_run=dry_run,
                backup_current=backup_current,
            )
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        return ReconciliationResult(operation="restore", outcomes=tuple(outcomes), dry_run=dry_run)

    def _restore_one(
        self,
        relative_path: str,
        version: str | None,
        *,
        keep_backup: bool,
        dry_run: bool,
        backup_current: bool,
    ) -> FileOutcome:
        target_path = self.target_root / relative_path
        try:
            record = self.store.find(relative_path, version)
        except (DotkeeperError, OSError, ValueError) as exc:
            return FileOutcome(relative_path, Action.RESTORE, None, None, error=exc)

        try:
            previous, current_hash = self._current_state(relative_path, target_path)
        except OSError as exc:
            return FileOutcome(relative_path, Action.RESTORE, None, None, error=exc, backup=record)
        if previous is FileState.UNTRACKED:
            return FileOutcome(
                relative_path,
                Action.SKIP,
                previous,
                previous,
                note="target is not a regular file",
                backup=record,
            )
        restored_state = self._state_for(relative_path, record)

        if current_hash == record.sha256:
            # Target already holds this version; only the pruning step remains.
            if not dry_run and not keep_backup:
                try:
                    self.store.delete(record)
                except (BackupMissingError, OSError) as exc:
                    return FileOutcome(
                        relative_path, Action.SKIP, previous, previous, error=exc, backup=record
                    )
            return FileOutcome(
                relative_path,
                Action.SKIP,
                previous,
                previous,
                note="target already matches backup",
                backup=record,
            )

        if dry_run:
            return FileOutcome(
                relative_path, Action.RESTORE, previous, restored_state, backup=record
            )

        try:
            content = self.store.load(record)
        except (BackupMissingError, OSError) as exc:
            return FileOutcome(
                relative_path, Action.RESTORE, previous, previous, error=exc, backup=record
            )

        note = None
        if backup_current and current_hash is not None:
            try:
                self.store.save(
                    relative_path,
                    target_path.read_bytes(),
                    mode=file_mode(target_path),
                )
            except (DotkeeperError, OSError, ValueError) as exc:
                return FileOutcome(
                    relative_path, Action.RESTORE, previous, previous, error=exc, backup=record
                )
            note = "previous content backed up"

        try:
            atomic_write_bytes(target_path, content, mode=self.store.mode(record))
        except OSError as exc:
            return FileOutcome(
                relative_path, Action.RESTORE, previous, previous, error=exc, backup=record
            )

        if not keep_backup:
            try:
                self.store.delete(record)
            except (BackupMissingError, OSError) as exc:
                return FileOutcome(
                    relative_path,
                    Action.RESTORE,
                    previous,
                    restored_state,
                    error=exc,
                    backup=record,
                )
        return FileOutcome(
            relative_path,
            Action.RESTORE,
            previous,
            restored_state,
            note=note,
            backup=record,
        )

    def _current_state(self, relative_path: str, target_path: Path) -> tuple[FileState, str | None]:
        if not target_path.exists():
            return FileState.MISSING, None
        if not is_regular_file(target_path):
            return FileState.UNTRACKED, None
        current_hash = sha256_file(target_path)
        source_hash = self._source_hash(relative_path)
        if source_hash is not None and source_hash == current_hash:
            return FileState.INSTALLED, current_hash
        return FileState.MODIFIED, current_hash

    def _state_for(self, relative_path: str, record: BackupRecord) -> FileState:
        if self._source_hash(relative_path) == record.sha256:
            return FileState.INSTALLED
        return FileState.MODIFIED

    def _source_hash(self, relative_path: str) -> str | None:
        if self.source_root is None:
            return None
        source_path = self.source_root / relative_path
        if not is_regular_file(source_path):
            return None
        return sha256_file(source_path)
