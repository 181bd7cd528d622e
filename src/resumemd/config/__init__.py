"\"\"\"Configuration management utilities.\"\"\""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent


class ConfigManager:
    """Simple YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path = PACKAGE_CONFIG_DIR):
        self._base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        return self._base_path / f"{name}.yaml"

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension."""
        return load_yaml_file(self.path_for(name))


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping from ``path``; an empty file yields an empty mapping."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    return loaded


__all__ = ["ConfigManager", "PACKAGE_CONFIG_DIR", "load_yaml_file"]
