"""Configuration loading for daisygen (.daisygen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILE_NAME = ".daisygen.yml"

DEFAULT_OUTPUT_DIR = "lib/daisygen_components"
DEFAULT_REPO_URL = "https://github.com/saadeghi/daisyui.git"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DaisyGenConfig:
    """Represents the settings defined in .daisygen.yml."""

    root: Path
    output_dir: Path
    base_module: Optional[str] = None
    components: List[str] = field(default_factory=list)
    base_dir: Optional[Path] = None
    repo_url: str = DEFAULT_REPO_URL
    templates_dir: Optional[Path] = None
    workers: int = 1
    skip_clone: bool = False

    @property
    def source_base_dir(self) -> Path:
        """Directory holding the ``tmp/daisyui`` checkout."""
        return self.base_dir or self.root


def load_config(config_path: Path) -> DaisyGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DaisyGenConfig(root=root, output_dir=root / DEFAULT_OUTPUT_DIR)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    output_dir = _as_str(data.get("output_dir")) or DEFAULT_OUTPUT_DIR
    base_dir = _as_str(data.get("base_dir"))
    templates_dir = _as_str(data.get("templates_dir"))
    workers = _as_int(data.get("workers"))
    if workers is not None and workers < 1:
        raise ConfigError("workers must be a positive integer")

    return DaisyGenConfig(
        root=root,
        output_dir=root / output_dir,
        base_module=_as_str(data.get("base_module")),
        components=parse_component_filter(data.get("components")),
        base_dir=root / base_dir if base_dir else None,
        repo_url=_as_str(data.get("repo_url")) or DEFAULT_REPO_URL,
        templates_dir=root / templates_dir if templates_dir else None,
        workers=workers or 1,
        skip_clone=_as_bool(data.get("skip_clone")) or False,
    )


def parse_component_filter(value: Any) -> List[str]:
    """Normalise ``"button, Badge"`` or ``["button", "badge"]`` into lower-case names."""
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = _as_str_list(value)
    names = [item.strip().lower() for item in items]
    return [name for name in names if name]


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
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


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


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


__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "DaisyGenConfig",
    "load_config",
    "parse_component_filter",
]
