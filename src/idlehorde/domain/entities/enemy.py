"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from idlehorde.core.types import EnemyKind

from .combatant import Combatant


@dataclass(slots=True)
class Enemy(Combatant):
    """A horde enemy spawned for the current stage."""

    kind: EnemyKind
