"""Runtime entity exports."""

from .combatant import Combatant
from .enemy import Enemy
from .hero import Hero
from .stats import Stats

__all__ = [
    "Combatant",
    "Enemy",
    "Hero",
    "Stats",
]
