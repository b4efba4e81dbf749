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

"""Source/target comparison for a single tracked file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .fileops import is_regular_file, path_present, sha256_file
from .models import FileState


@dataclass(frozen=True)
class FileInspection:
    state: FileState
    source_path: Path
    target_path: Path
    source_sha256: str | None = None
    target_sha256: str | None = None
    note: str | None = None


def inspect_file(relative_path: str, source_root: Path, target_root: Path) -> FileInspection:
    """Classify one file and keep the hashes computed along the way.

    Symlinks on either side are dereferenced. Anything that is not a regular
    file after dereferencing (directories, sockets, FIFOs, devices) is reported
    as ``UNTRACKED`` with a note and must not be acted upon.
    """
    source_path = Path(source_root) / relative_path
    target_path = Path(target_root) / relative_path

    if not target_path.exists():
        note = "dangling symlink in target" if target_path.is_symlink() else None
        return FileInspection(FileState.MISSING, source_path, target_path, note=note)
    if not is_regular_file(target_path):
        return FileInspection(
            FileState.UNTRACKED,
            source_path,
            target_path,
            note="target is not a regular file",
        )
    if not is_regular_file(source_path):
        note = (
            "source is not a regular file"
            if path_present(source_path)
            else "source file disappeared"
        )
        return FileInspection(FileState.UNTRACKED, source_path, target_path, note=note)

    source_hash = sha256_file(source_path)
    target_hash = sha256_file(target_path)
    state = FileState.INSTALLED if source_hash == target_hash else FileState.MODIFIED
    return FileInspection(state, source_path, target_path, source_hash, target_hash)


def classify(relative_path: str, source_root: Path, target_root: Path) -> FileState:
    return inspect_file(relative_path, source_root, target_root).state
