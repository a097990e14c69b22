"""Configuration loading for dustat (.dustat.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import InvalidInputError

CONFIG_FILENAME = ".dustat.yml"


class ConfigError(InvalidInputError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DustatConfig:
    """Represents the settings defined in .dustat.yml."""

    root: Path
    ignore: List[str] = field(default_factory=list)
    skip_dirs: List[str] = field(default_factory=list)
    json_output: bool = False


def load_config(config_path: Path, *, explicit: bool = False) -> DustatConfig:
    """Load configuration from disk, returning defaults when the file is absent.

    ``config_path`` may be a project directory, a file inside the project
    (its directory's ``.dustat.yml`` is used), or with ``explicit`` set the
    configuration file itself, which must then exist.
    """
    config_file = _resolve_config_path(config_path, explicit=explicit)
    root = config_file.parent.resolve()

    if not config_file.exists():
        if explicit:
            raise ConfigError(f"config file not found: {config_path}")
        return DustatConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    return DustatConfig(
        root=root,
        ignore=_as_str_list(data.get("ignore")),
        skip_dirs=_as_str_list(data.get("skip_dirs")),
        json_output=_as_bool(data.get("json")) or False,
    )


def _resolve_config_path(config_path: Path, *, explicit: bool) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if not explicit and config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item).strip() for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "DustatConfig", "load_config"]
