"""Helpers for resolving definition file locations."""
from __future__ import annotations

import os
from pathlib import Path

DATA_DIR_ENV_VAR = "IDLEHORDE_DATA_DIR"


def get_package_root() -> Path:
    """Return the directory of the installed idlehorde package."""
    return Path(__file__).resolve().parents[1]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files.

    An explicit ``base_path`` wins, then the ``IDLEHORDE_DATA_DIR``
    environment variable, then the definitions shipped with the package.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        return Path(override)
    return get_package_root() / "data" / "definitions"
