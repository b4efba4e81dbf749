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

"""Enumeration of the installable files under a source directory."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

VCS_DIRS = frozenset({".git", ".hg", ".svn", ".bzr", "CVS"})
DEFAULT_EXCLUDES = frozenset(
    {
        *VCS_DIRS,
        ".DS_Store",
        "node_modules",
        "README.md",
        ".dotkeeperrc",
        ".dotkeeper.toml",
    }
)


def iter_catalog(
    source_root: str | Path,
    *,
    exclude: Iterable[str] = (),
    skip_dirs: Iterable[str | Path] = (),
) -> Iterator[str]:
    """Yield relative POSIX paths of installable files in lexicographic order.

    The root is validated before the first entry is produced, so a missing or
    non-directory root raises even if the iterator is never consumed.
    """
    root = Path(source_root).expanduser()
    if not root.exists():
        raise FileNotFoundError(f"source dir not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"source dir is not a directory: {root}")
    patterns = tuple(exclude)
    skipped = _resolve_skip_dirs(skip_dirs)
    return _walk(root, "", patterns, skipped)


class PathCatalog:
    """Restartable view over :func:`iter_catalog`; each iteration re-walks the tree."""

    def __init__(
        self,
        source_root: str | Path,
        *,
        exclude: Iterable[str] = (),
        skip_dirs: Iterable[str | Path] = (),
    ) -> None:
        self.source_root = Path(source_root).expanduser()
        self.exclude = tuple(exclude)
        self.skip_dirs = tuple(skip_dirs)

    def __iter__(self) -> Iterator[str]:
        return iter_catalog(self.source_root, exclude=self.exclude, skip_dirs=self.skip_dirs)


def is_excluded(relative_path: str, patterns: Iterable[str] = ()) -> bool:
    parts = relative_path.split("/")
    if any(part in DEFAULT_EXCLUDES for part in parts):
        return True
    for pattern in patterns:
        if fnmatch.fnmatchcase(relative_path, pattern):
            return True
        if any(fnmatch.fnmatchcase(part, pattern) for part in parts):
            return True
    return False


def _walk(
    directory: Path,
    prefix: str,
    patterns: tuple[str, ...],
    skipped: frozenset[str],
) -> Iterator[str]:
    with os.scandir(directory) as scan:
        entries = sorted(scan, key=lambda entry: entry.name)
    for entry in entries:
        relative = f"{prefix}{entry.name}"
        if is_excluded(relative, patterns):
            continue
        if entry.is_dir(follow_symlinks=False):
            if _real(entry.path) in skipped:
                continue
            yield from _walk(Path(entry.path), f"{relative}/", patterns, skipped)
        elif entry.is_symlink() and entry.is_dir():
            continue
        else:
            yield relative


def _resolve_skip_dirs(skip_dirs: Iterable[str | Path]) -> frozenset[str]:
    return frozenset(_real(Path(path).expanduser()) for path in skip_dirs)


def _real(path: str | Path) -> str:
    return os.path.realpath(path)
