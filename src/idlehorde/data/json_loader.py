"""Low-level JSON helpers for repositories."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .errors import DataLoadError, DataValidationError


def load_json_object(path: Path) -> Dict[str, Any]:
    """Load a JSON object from disk.

    Raises DataLoadError when the file cannot be read or parsed and
    DataValidationError when the top-level value is not an object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file: {path}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise DataValidationError(f"Expected top-level object in {path}")
    return raw
