"""Configuration loading for webpulse (.webpulse.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".webpulse.yml"

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_MANIFEST_SIZE = 1024 * 1024
DEFAULT_MAX_RUSH_CONFIG_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_DEPTH = 50


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """Settings read from .webpulse.yml at the analysed root."""

    root: Path
    exclude_dirs: List[str] = field(default_factory=list)
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_manifest_size: int = DEFAULT_MAX_MANIFEST_SIZE
    max_rush_config_size: int = DEFAULT_MAX_RUSH_CONFIG_SIZE
    max_depth: int = DEFAULT_MAX_DEPTH
    salesforce: bool = False


def load_config(config_path: Path) -> AnalysisConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AnalysisConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AnalysisConfig(root=root)
    config.exclude_dirs = _as_str_list(data.get("exclude_dirs"))
    config.max_file_size = _positive(data.get("max_file_size"), config.max_file_size)
    config.max_manifest_size = _positive(data.get("max_manifest_size"), config.max_manifest_size)
    config.max_rush_config_size = _positive(
        data.get("max_rush_config_size"), config.max_rush_config_size
    )
    config.max_depth = _positive(data.get("max_depth"), config.max_depth)
    salesforce = _as_bool(data.get("salesforce"))
    if salesforce is not None:
        config.salesforce = salesforce
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
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
    return loaded if loaded is not None else {}


def _positive(value: Any, default: int) -> int:
    parsed = _as_int(value)
    if parsed is None or parsed <= 0:
        return default
    return parsed


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


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
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["AnalysisConfig", "ConfigError", "CONFIG_FILENAME", "load_config"]
