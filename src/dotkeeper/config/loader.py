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

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .installer import default_backup_dir, resolve_config_path


@dataclass(frozen=True)
class BackupDefaults:
    enabled: bool = True
    keep: bool = False


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class CliDefaults:
    backup: BackupDefaults = field(default_factory=BackupDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)


@dataclass(frozen=True)
class AppConfig:
    config_path: Path
    source_dir: Path
    target_dir: Path
    backup_dir: Path
    exclude: tuple[str, ...] = ()
    cli_defaults: CliDefaults = field(default_factory=CliDefaults)

    def skip_dirs(self) -> tuple[Path, ...]:
        return (self.backup_dir, self.config_path.parent)


@dataclass(frozen=True)
class BackupConfig:
    backup_dir: Path
    target_dir: Path
    source_dir: Path | None = None
    defaults: BackupDefaults = field(default_factory=BackupDefaults)


def load_app_config(
    path: str | Path | None = None,
    *,
    source_dir: str | Path | None = None,
) -> AppConfig:
    """Load and validate the TOML config.

    ``source_dir`` overrides the configured value (``--source``). The resolved
    source directory must exist; the target and backup roots need not.
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        if source_dir is None:
            raise FileNotFoundError(
                f"config file not found: {config_path}; run `dotkeeper init --source-dir DIR`"
            )
        data: dict[str, object] = {}
    else:
        data = _load_toml(config_path)

    source_value = source_dir if source_dir is not None else data.get("source_dir")
    resolved_source = _parse_required_path(source_value, field="source_dir")
    if not resolved_source.exists():
        raise FileNotFoundError(f"source_dir not found: {resolved_source}")
    if not resolved_source.is_dir():
        raise NotADirectoryError(f"source_dir is not a directory: {resolved_source}")

    target_dir = _parse_optional_path(data.get("target_dir"), field="target_dir") or Path.home()
    backup_cfg = _get_dict(data, "backup")
    backup_dir = _parse_optional_path(backup_cfg.get("dir"), field="backup.dir")
    catalog_cfg = _get_dict(data, "catalog")
    return AppConfig(
        config_path=config_path,
        source_dir=resolved_source.resolve(),
        target_dir=target_dir,
        backup_dir=backup_dir or default_backup_dir(),
        exclude=_parse_str_list(catalog_cfg.get("exclude"), field="catalog.exclude"),
        cli_defaults=_parse_cli_defaults(data),
    )


def load_backup_config(path: str | Path | None = None) -> BackupConfig:
    """Load the settings needed by commands that only touch the backup store.

    Unlike :func:`load_app_config` a missing config file or source directory is
    not an error here: backups stay listable and restorable on their own.
    """
    config_path = resolve_config_path(path)
    data = _load_toml(config_path) if config_path.exists() else {}
    source_dir = _parse_optional_path(data.get("source_dir"), field="source_dir")
    if source_dir is not None and not source_dir.is_dir():
        source_dir = None
    backup_cfg = _get_dict(data, "backup")
    return BackupConfig(
        backup_dir=_parse_optional_path(backup_cfg.get("dir"), field="backup.dir")
        or default_backup_dir(),
        target_dir=_parse_optional_path(data.get("target_dir"), field="target_dir") or Path.home(),
        source_dir=source_dir.resolve() if source_dir is not None else None,
        defaults=_parse_cli_defaults(data).backup,
    )


def load_cli_defaults(path: str | Path | None = None) -> CliDefaults:
    config_path = resolve_config_path(path)
    if not config_path.exists():
        return CliDefaults()
    return _parse_cli_defaults(_load_toml(config_path))


def _parse_cli_defaults(data: dict[str, object]) -> CliDefaults:
    backup_cfg = _get_dict(data, "backup")
    ui_cfg = _get_dict(data, "ui")
    return CliDefaults(
        backup=BackupDefaults(
            enabled=_parse_bool(backup_cfg.get("enabled"), field="backup.enabled", default=True),
            keep=_parse_bool(backup_cfg.get("keep"), field="backup.keep", default=False),
        ),
        ui=UiDefaults(
            quiet=_parse_bool(ui_cfg.get("quiet"), field="ui.quiet", default=False),
            no_color=_parse_bool(ui_cfg.get("no_color"), field="ui.no_color", default=False),
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid TOML in {path}: {exc}") from exc


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _expand(value: str) -> Path:
    return Path(os.path.expandvars(value)).expanduser()


def _parse_required_path(value: object, *, field: str) -> Path:
    if isinstance(value, Path):
        return value.expanduser()
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return _expand(value.strip())


def _parse_optional_path(value: object, *, field: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    if not normalized:
        return None
    return _expand(normalized)


def _parse_str_list(value: object, *, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field} must be a list of strings")
    return tuple(item.strip() for item in value if item.strip())


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")
