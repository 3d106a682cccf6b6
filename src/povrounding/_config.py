from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from povrounding.settings import RoundingSettings

CONFIG_DIR = Path.home() / ".povrounding"
CONFIG_FILE = CONFIG_DIR / "povrounding.cfg"
DEFAULT_CONFIG = {
    "_comment": "Defaults for every povrounding run. Command-line options override these values.",
    "depth": 6.0,
    "radius": 1.0,
    "factor": 0.76,
    "smoothness": 4,
}
_KEY_ALIASES = {
    "depth": "depth",
    "extrusion_depth": "depth",
    "radius": "radius",
    "rounding_radius": "radius",
    "factor": "factor",
    "rounding_factor": "factor",
    "bezier_factor": "factor",
    "smoothness": "smoothness",
    "steps": "smoothness",
    "skip_front": "skip_front",
    "skip_back": "skip_back",
}


def ensure_user_config(config_file: Path | None = None) -> None:
    """Ensure ~/.povrounding/povrounding.cfg exists with sane defaults."""

    config_file = config_file or CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if config_file.exists():
        return

    try:
        config_file.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config(config_file: Path | None = None) -> Dict[str, Any]:
    config_file = config_file or CONFIG_FILE
    ensure_user_config(config_file)
    try:
        raw = json.loads(config_file.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(raw, dict):
        return DEFAULT_CONFIG.copy()
    return raw


def _normalize_keys(raw: Dict[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        normalized = _KEY_ALIASES.get(str(key).strip().lower().replace("-", "_"))
        if normalized is not None:
            values[normalized] = value
    return values


def load_settings(config_file: Path | None = None, **overrides: Any) -> RoundingSettings:
    """Merge the user config with explicit overrides; ``None`` overrides are ignored."""

    file_values = _normalize_keys(_load_user_config(config_file))
    defaults = asdict(RoundingSettings())
    merged = {key: file_values.get(key, default) for key, default in defaults.items()}
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return RoundingSettings(**merged)
