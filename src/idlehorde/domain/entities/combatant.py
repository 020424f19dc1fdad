"""Shared combatant behaviour for heroes and enemies."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from .stats import Stats

DEFENSE_MITIGATION = 0.5
MINIMUM_DAMAGE = 1


@dataclass(slots=True)
class Combatant:
    """A participant in the horde battle.

    ``x`` and ``y`` belong to the renderer; the simulation only copies them
    into floating combat text.
    """

    id: int
    name: str
    stats: Stats
    x: float = field(default=0.0, kw_only=True)
    y: float = field(default=0.0, kw_only=True)

    @property
    def is_alive(self) -> bool:
        return self.stats.health > 0

    def take_damage(self, raw_amount: float) -> int:
        """Apply a hit after defense mitigation and return the damage dealt.

        Half of the defense value is subtracted from the raw hit and the
        result is truncated, but every hit deals at least one point.
        """
        reduction = self.stats.defense * DEFENSE_MITIGATION
        actual = max(MINIMUM_DAMAGE, math.floor(raw_amount - reduction))
        self.stats.health = max(0, self.stats.health - actual)
        return actual

    def heal(self) -> None:
        """Restore health to the maximum."""
        self.stats.health = self.stats.max_health

    def restore_health(self, amount: int) -> int:
        """Add up to ``amount`` health and return how much was restored."""
        before = self.stats.health
        self.stats.health = min(self.stats.max_health, before + max(0, amount))
        return self.stats.health - before

    def health_percent(self) -> float:
        if self.stats.max_health <= 0:
            return 0.0
        return self.stats.health / self.stats.max_health
