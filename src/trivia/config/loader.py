from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .schema import Settings

DEFAULT_CONFIG_PATH = Path("config/default.yaml")
OVERRIDES_ENV_VAR = "TRIVIA_CONFIG_OVERRIDES"


def read_yaml(path: Path) -> Dict[str, Any]:
    """Parse a trivia settings file; a blank file means "all defaults"."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay `override` onto `base` section by section (e.g. only `game.answer_pause_seconds`)."""
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            result[key] = merge_dicts(base[key], value)
        else:
            result[key] = value
    return result


def _env_overrides() -> Dict[str, Any]:
    raw = os.getenv(OVERRIDES_ENV_VAR)
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as err:
        raise ValueError(f"Failed to parse {OVERRIDES_ENV_VAR} env var as JSON.") from err


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Build the game settings: rules, leaderboard slot, question/data paths, logging.

    An explicit `config_path` must exist. Without one, `config/default.yaml` is read when
    the game is started from the project root, and the built-in defaults apply anywhere
    else. `TRIVIA_CONFIG_OVERRIDES` (JSON) is layered on last, which is how tests point
    the game at a temporary data directory.
    """
    if config_path:
        data = read_yaml(Path(config_path))
    elif DEFAULT_CONFIG_PATH.exists():
        data = read_yaml(DEFAULT_CONFIG_PATH)
    else:
        data = {}

    data = merge_dicts(data, _env_overrides())

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
