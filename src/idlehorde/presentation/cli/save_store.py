"""File-system storage for the single save snapshot."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from idlehorde.presentation.cli import config

logger = logging.getLogger(__name__)

SAVE_FILENAME = "idlehorde_save.json"


class SaveStore:
    """Reads and writes the save payload as JSON on disk."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()

    @property
    def path(self) -> Path:
        return self._base_dir / SAVE_FILENAME

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Dict[str, Any] | None:
        """Return the stored payload, or None when missing or unreadable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No saved game found at %s", self.path)
            return None
        except OSError as exc:
            logger.warning("Failed to read save %s: %s", self.path, exc)
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Save file %s is not valid JSON: %s", self.path, exc)
            return None
        return payload if isinstance(payload, dict) else None

    def write(self, payload: Dict[str, Any]) -> bool:
        """Persist the payload; returns False when the write fails."""
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            logger.warning("Failed to write save %s: %s", self.path, exc)
            return False
        logger.info("Game saved to %s", self.path)
        return True

    def delete(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return

    def last_save_time(self) -> int | None:
        payload = self.read()
        if payload is None:
            return None
        value = payload.get("lastSaveTime")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
        return None
