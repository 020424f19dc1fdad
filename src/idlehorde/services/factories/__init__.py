"""Factories for runtime entities."""

from .enemy_factory import create_enemy_for_stage
from .hero_factory import DEFAULT_HERO_ID, create_starting_hero

__all__ = [
    "DEFAULT_HERO_ID",
    "create_enemy_for_stage",
    "create_starting_hero",
]
