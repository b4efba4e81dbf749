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

"""Versioned, content-addressed backups of target files.

Layout: ``<root>/<relative path>/<version>.<sha256>`` where ``version`` is the
UTC capture time rendered as ``YYYYMMDDTHHMMSSffffffZ``. Versions sort
lexicographically in time order and are strictly increasing per path.
"""

from __future__ import annotations

import os
import re
import shutil
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .errors import BackupMissingError, BackupWriteError, VersionNotFoundError
from .fileops import atomic_write_bytes, sha256_bytes
from .models import BackupRecord, format_version, parse_version
from .validation import normalize_relative_path

_BLOB_RE = re.compile(r"^(?P<version>\d{8}T\d{12}Z)\.(?P<sha256>[0-9a-f]{64})$")
LATEST = "latest"


class BackupStore:
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def save(self, relative_path: str, content: bytes, *, mode: int | None = None) -> BackupRecord:
        """Persist ``content`` as the newest backup of ``relative_path``.

        If the latest existing record already holds identical content it is
        returned instead of writing a duplicate.
        """
        rel = _key(relative_path)
        digest = sha256_bytes(content)
        try:
            latest = self.latest(rel)
        except OSError as exc:
            raise BackupWriteError(f"unable to read backups for {rel}: {exc}") from exc
        if latest is not None and latest.sha256 == digest:
            return latest

        timestamp = _now()
        if latest is not None and timestamp <= latest.timestamp:
            timestamp = latest.timestamp + timedelta(microseconds=1)
        blob_path = self._record_dir(rel) / f"{format_version(timestamp)}.{digest}"
        try:
            atomic_write_bytes(blob_path, content, mode=mode)
        except OSError as exc:
            raise BackupWriteError(f"unable to write backup for {rel}: {exc}") from exc
        return BackupRecord(
            relative_path=rel,
            timestamp=timestamp,
            sha256=digest,
            blob_path=blob_path,
            size=len(content),
        )

    def latest(self, relative_path: str) -> BackupRecord | None:
        records = self.list(relative_path)
        return records[-1] if records else None

    def list(self, relative_path: str | None = None) -> list[BackupRecord]:
        return list(self.iter_records(relative_path))

    def iter_records(self, relative_path: str | None = None) -> Iterator[BackupRecord]:
        """Yield records ordered by path, then by timestamp ascending."""
        if relative_path is not None:
            rel = _key(relative_path)
            yield from self._records_in(self._record_dir(rel), rel)
            return
        if not self.root.is_dir():
            return
        yield from self._walk(self.root, "")

    def paths(self) -> list[str]:
        seen: list[str] = []
        for record in self.iter_records():
            if not seen or seen[-1] != record.relative_path:
                seen.append(record.relative_path)
        return seen

    def find(self, relative_path: str, version: str | None = None) -> BackupRecord:
        """Resolve a version selector (``None``/``latest``, exact, or unique prefix)."""
        records = self.list(relative_path)
        if not records:
            raise VersionNotFoundError(f"no backups found for {relative_path}")
        selector = (version or LATEST).strip()
        if selector.lower() == LATEST:
            return records[-1]
        for record in records:
            if record.version == selector:
                return record
        matches = [record for record in records if record.version.startswith(selector)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise VersionNotFoundError(
                f"backup version {selector} is ambiguous for {relative_path} "
                f"({len(matches)} matches)"
            )
        raise VersionNotFoundError(f"backup version {selector} not found for {relative_path}")

    def load(self, record: BackupRecord) -> bytes:
        try:
            return record.blob_path.read_bytes()
        except FileNotFoundError as exc:
            raise BackupMissingError(
                f"backup {record.version} for {record.relative_path} is missing"
            ) from exc

    def mode(self, record: BackupRecord) -> int | None:
        try:
            return record.blob_path.stat().st_mode & 0o7777
        except FileNotFoundError:
            return None

    def delete(self, record: BackupRecord) -> None:
        try:
            record.blob_path.unlink()
        except FileNotFoundError as exc:
            raise BackupMissingError(
                f"backup {record.version} for {record.relative_path} is missing"
            ) from exc
        self._prune_empty_dirs(record.blob_path.parent)

    def clear(self) -> int:
        if not self.root.is_dir():
            return 0
        count = sum(1 for _record in self.iter_records())
        for entry in sorted(self.root.iterdir()):
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
        return count

    def _record_dir(self, relative_path: str) -> Path:
        return self.root / relative_path

    def _records_in(self, directory: Path, relative_path: str) -> Iterator[BackupRecord]:
        if not directory.is_dir():
            return
        blobs: list[tuple[str, str, Path]] = []
        with os.scandir(directory) as scan:
            for entry in scan:
                match = _BLOB_RE.match(entry.name)
                if match is None or not entry.is_file(follow_symlinks=False):
                    continue
                blobs.append((match.group("version"), match.group("sha256"), Path(entry.path)))
        blobs.sort()
        for version, digest, blob_path in blobs:
            try:
                size = blob_path.stat().st_size
            except FileNotFoundError:
                continue
            yield BackupRecord(
                relative_path=relative_path,
                timestamp=parse_version(version),
                sha256=digest,
                blob_path=blob_path,
                size=size,
            )

    def _walk(self, directory: Path, prefix: str) -> Iterator[BackupRecord]:
        if prefix:
            yield from self._records_in(directory, prefix.rstrip("/"))
        with os.scandir(directory) as scan:
            subdirs = sorted(
                entry.name for entry in scan if entry.is_dir(follow_symlinks=False)
            )
        for name in subdirs:
            yield from self._walk(directory / name, f"{prefix}{name}/")

    def _prune_empty_dirs(self, directory: Path) -> None:
        root = self.root.resolve()
        current = directory
        while current.resolve() != root and root in current.resolve().parents:
            try:
                current.rmdir()
            except OSError:
                return
            current = current.parent


def _key(relative_path: str) -> str:
    # Catalog names come from os.scandir and may carry surrogate escapes.
    return normalize_relative_path(relative_path, label="backup path", allow_undecodable=True)


def _now() -> datetime:
    return datetime.now(timezone.utc)
