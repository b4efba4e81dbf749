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

import unicodedata
from pathlib import PurePath

MAX_PATH_BYTES = 4096


def normalize_path(
    path: object,
    *,
    label: str = "path",
    allow_undecodable: bool = False,
) -> str:
    """Normalize a path to Unicode NFC and ensure it is valid UTF-8.

    With ``allow_undecodable`` a name holding surrogate escapes (how
    ``os.fsdecode`` represents bytes that are not UTF-8) is accepted as is.
    """
    if not isinstance(path, str):
        raise ValueError(f"{label} must be a string")
    try:
        path.encode("utf-8", "surrogateescape" if allow_undecodable else "strict")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{label} must be valid UTF-8") from exc
    return unicodedata.normalize("NFC", path)


def normalize_relative_path(
    path: object,
    *,
    label: str = "path",
    allow_undecodable: bool = False,
) -> str:
    """Normalize a tracked file path to a relative POSIX path.

    Accepts ``PurePath`` values and strings using either separator; leading
    ``./`` segments are dropped. Absolute paths and ``..`` segments are rejected
    so a relative path can never escape the root it is joined to.
    """
    if isinstance(path, PurePath):
        path = path.as_posix()
    normalized = normalize_path(path, label=label, allow_undecodable=allow_undecodable)
    normalized = normalized.replace("\\", "/").strip()
    if not normalized:
        raise ValueError(f"{label} must be a non-empty string")
    if normalized.startswith("/"):
        raise ValueError(f"{label} must be relative (no leading '/')")
    segments = [segment for segment in normalized.split("/") if segment not in ("", ".")]
    if not segments:
        raise ValueError(f"{label} must name a file")
    if any(segment == ".." for segment in segments):
        raise ValueError(f"{label} must not contain '..' path segments")
    normalized = "/".join(segments)
    path_bytes = len(normalized.encode("utf-8", "surrogateescape"))
    if path_bytes > MAX_PATH_BYTES:
        raise ValueError(f"{label} exceeds {MAX_PATH_BYTES} bytes: {path_bytes} bytes")
    return normalized
