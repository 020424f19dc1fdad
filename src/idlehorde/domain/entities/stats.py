"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Stats:
    """Stores basic combat stats."""

    max_health: int
    health: int
    attack: int
    defense: int
