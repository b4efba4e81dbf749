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

import difflib
from collections.abc import Iterable
from pathlib import Path

from .backups import BackupStore
from .catalog import PathCatalog
from .models import DiffSummary, FileState, LineChange, StatusEntry, StatusReport
from .state import inspect_file

MAX_DIFF_CHANGES = 3
MAX_LINE_LENGTH = 60


class StatusReporter:
    """Read-only classification of every catalog entry."""

    def __init__(
        self,
        source_root: str | Path,
        target_root: str | Path,
        *,
        store: BackupStore | None = None,
        exclude: Iterable[str] = (),
        skip_dirs: Iterable[str | Path] = (),
    ) -> None:
        self.source_root = Path(source_root).expanduser()
        self.target_root = Path(target_root).expanduser()
        self.store = store
        self.catalog = PathCatalog(self.source_root, exclude=exclude, skip_dirs=skip_dirs)

    def report(self, *, verbose: bool = False) -> StatusReport:
        return StatusReport(tuple(self._entry(path, verbose) for path in self.catalog))

    def _entry(self, relative_path: str, verbose: bool) -> StatusEntry:
        try:
            info = inspect_file(relative_path, self.source_root, self.target_root)
        except FileNotFoundError:
            return StatusEntry(relative_path, FileState.MISSING, note="file disappeared")
        except OSError as exc:
            return StatusEntry(relative_path, FileState.UNTRACKED, note=f"unreadable: {exc}")

        if info.state is FileState.UNTRACKED and info.note == "source file disappeared":
            return StatusEntry(relative_path, FileState.MISSING, note=info.note)
        if info.state is not FileState.MODIFIED:
            return StatusEntry(relative_path, info.state, note=info.note)

        matches_backup = False
        if self.store is not None:
            try:
                latest = self.store.latest(relative_path)
            except (OSError, ValueError):
                latest = None
            matches_backup = latest is not None and latest.sha256 == info.target_sha256
        diff = None
        if verbose:
            try:
                diff = summarize_diff(info.source_path.read_bytes(), info.target_path.read_bytes())
            except FileNotFoundError:
                return StatusEntry(relative_path, FileState.MISSING, note="file disappeared")
            except OSError as exc:
                return StatusEntry(relative_path, FileState.MODIFIED, note=f"unreadable: {exc}")
        return StatusEntry(
            relative_path, FileState.MODIFIED, diff=diff, matches_backup=matches_backup
        )


def summarize_diff(source: bytes, target: bytes) -> DiffSummary:
    try:
        source_lines = source.decode("utf-8").splitlines()
        target_lines = target.decode("utf-8").splitlines()
    except UnicodeDecodeError:
        return DiffSummary(
            source_lines=source.count(b"\n"),
            target_lines=target.count(b"\n"),
            binary=True,
        )

    changes: list[LineChange] = []
    matcher = difflib.SequenceMatcher(a=source_lines, b=target_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        span = max(i2 - i1, j2 - j1)
        for offset in range(span):
            if len(changes) >= MAX_DIFF_CHANGES:
                break
            source_index = i1 + offset
            target_index = j1 + offset
            changes.append(
                LineChange(
                    line=(source_index if source_index < i2 else target_index) + 1,
                    source=_clip(source_lines[source_index]) if source_index < i2 else None,
                    target=_clip(target_lines[target_index]) if target_index < j2 else None,
                )
            )
        if len(changes) >= MAX_DIFF_CHANGES:
            break
    return DiffSummary(
        source_lines=len(source_lines),
        target_lines=len(target_lines),
        changes=tuple(changes),
    )


def _clip(line: str) -> str:
    if len(line) > MAX_LINE_LENGTH:
        return f"{line[:MAX_LINE_LENGTH]}..."
    return line
