"""Hero template definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class HeroDef:
    """Base stats a fresh hero starts from."""

    id: str
    name: str
    role: str
    base_health: int
    base_attack: int
    base_defense: int
    starting_skills: Tuple[str, ...]
