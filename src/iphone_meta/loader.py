"""Load middleware options from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from .config import IPhoneConfig

SECTION = "iphone"


def load_config(path: str | Path) -> IPhoneConfig:
    """Build an :class:`IPhoneConfig` from a JSON or YAML file.

    Options may sit at the top level or under an ``iphone`` section.
    """

    data = _read_file(path)
    if not isinstance(data, dict):
        raise RuntimeError(f"config file {path} must contain a mapping")
    section = data.get(SECTION, data)
    if not isinstance(section, dict):
        raise RuntimeError(f"'{SECTION}' section in {path} must be a mapping")
    return IPhoneConfig(**section)


def _read_file(path: str | Path) -> object:
    payload = Path(path).read_text(encoding="utf-8")
    if not payload.strip():
        return {}
    suffix = Path(path).suffix.lower()
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required for YAML config files")
        return yaml.safe_load(payload) or {}
    return json.loads(payload)


__all__ = ["load_config"]
