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

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import tomlkit
from platformdirs import user_data_dir, user_config_dir

APP_NAME = "dotkeeper"
CONFIG_FILENAME = "config.toml"
LEGACY_CONFIG_FILENAME = ".dotkeeperrc"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"
XDG_DATA_ENV = "XDG_DATA_HOME"
CONFIG_ENV = "DOTKEEPER_CONFIG"


@dataclass(frozen=True)
class ConfigPaths:
    user_config_dir: Path
    user_config_path: Path
    legacy_config_path: Path
    default_backup_dir: Path


def _user_config_dir() -> Path:
    xdg_override = os.environ.get(XDG_CONFIG_ENV)
    if xdg_override:
        return Path(xdg_override) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / ".config" / APP_NAME
    return Path(user_config_dir(APP_NAME, appauthor=False))


def _user_data_dir() -> Path:
    xdg_override = os.environ.get(XDG_DATA_ENV)
    if xdg_override:
        return Path(xdg_override) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / ".local" / "share" / APP_NAME
    return Path(user_data_dir(APP_NAME, appauthor=False))


def _build_paths() -> ConfigPaths:
    config_dir = _user_config_dir()
    return ConfigPaths(
        user_config_dir=config_dir,
        user_config_path=config_dir / CONFIG_FILENAME,
        legacy_config_path=Path.home() / LEGACY_CONFIG_FILENAME,
        default_backup_dir=_user_data_dir() / "backup",
    )


def default_backup_dir() -> Path:
    return _build_paths().default_backup_dir


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(os.path.expandvars(str(path))).expanduser()
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(os.path.expandvars(env_path)).expanduser()
    return _build_paths().user_config_path


def user_config_needs_init(path: str | Path | None = None) -> bool:
    return not resolve_config_path(path).exists()


def render_config(
    source_dir: str | Path,
    *,
    target_dir: str | Path | None = None,
    backup_dir: str | Path | None = None,
) -> str:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("dotkeeper configuration"))
    doc.add("source_dir", str(source_dir))
    if target_dir is not None:
        doc.add("target_dir", str(target_dir))

    backup = tomlkit.table()
    if backup_dir is not None:
        backup.add("dir", str(backup_dir))
    backup.add("enabled", True)
    backup.add("keep", False)
    doc.add("backup", backup)

    catalog = tomlkit.table()
    catalog.add("exclude", tomlkit.array())
    doc.add("catalog", catalog)

    ui = tomlkit.table()
    ui.add("quiet", False)
    ui.add("no_color", False)
    doc.add("ui", ui)
    return tomlkit.dumps(doc)


def init_user_config(
    source_dir: str | Path,
    *,
    path: str | Path | None = None,
    force: bool = False,
    target_dir: str | Path | None = None,
    backup_dir: str | Path | None = None,
) -> Path:
    config_path = resolve_config_path(path)
    if config_path.exists() and not force:
        raise FileExistsError(
            f"config file already exists: {config_path}; use --force to overwrite it"
        )
    _write_config(
        config_path,
        render_config(source_dir, target_dir=target_dir, backup_dir=backup_dir),
    )
    return config_path


def migrate_legacy_config(path: str | Path | None = None) -> Path | None:
    """Convert a legacy JSON ``~/.dotkeeperrc`` into the TOML config.

    Returns the new config path when a migration happened. The JSON file is
    only removed after the TOML file has been written.
    """
    paths = _build_paths()
    config_path = resolve_config_path(path)
    legacy_path = paths.legacy_config_path
    if config_path.exists() or not legacy_path.is_file():
        return None
    try:
        data = json.loads(legacy_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"legacy config is not valid JSON: {legacy_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"legacy config must be a JSON object: {legacy_path}")
    source_dir = data.get("source_dir")
    if not isinstance(source_dir, str) or not source_dir.strip():
        raise ValueError(f"legacy config has no source_dir: {legacy_path}")
    _write_config(config_path, render_config(source_dir.strip()))
    legacy_path.unlink()
    return config_path


def _write_config(config_path: Path, text: str) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(text, encoding="utf-8")
