"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from idlehorde.core.types import VALID_SPEED_MULTIPLIERS
from idlehorde.services.game_session import AUTOSAVE_INTERVAL_MS

logger = logging.getLogger(__name__)

_DEFAULT_SPEED = 1


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "IdleHorde"
        return Path.home() / "IdleHorde"
    return Path.home() / ".config" / "idlehorde"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    return get_user_data_dir() / "saves"


def default_config() -> Dict[str, int]:
    return {"speed_multiplier": _DEFAULT_SPEED, "autosave_interval_ms": AUTOSAVE_INTERVAL_MS}


def _normalize(raw: Dict[str, Any]) -> Dict[str, int]:
    config = default_config()
    speed = raw.get("speed_multiplier")
    if speed in VALID_SPEED_MULTIPLIERS and not isinstance(speed, bool):
        config["speed_multiplier"] = speed
    interval = raw.get("autosave_interval_ms")
    if isinstance(interval, int) and not isinstance(interval, bool) and interval > 0:
        config["autosave_interval_ms"] = interval
    return config


def load_config(path: Path | None = None) -> Dict[str, int]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        return default_config()
    return _normalize(raw)


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(_normalize(config), indent=2, sort_keys=True), encoding="utf-8")
