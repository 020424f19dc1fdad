"""Floating combat text (damage and heal numbers)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

EFFECT_TTL_MS = 1000.0
SPAWN_OFFSET_Y = 20.0
DRIFT_PER_SECOND = 30.0


@dataclass(slots=True)
class EffectEntry:
    """A single floating number. ``amount`` is never negative; ``is_heal`` carries the sign."""

    x: float
    y: float
    amount: int
    is_heal: bool
    age_ms: float = 0.0
    ttl_ms: float = EFFECT_TTL_MS
    opacity: float = 1.0

    @property
    def expired(self) -> bool:
        return self.age_ms >= self.ttl_ms


class EffectFeed:
    """Owns the live floating numbers: spawn, age, fade and expire."""

    def __init__(self) -> None:
        self._entries: List[EffectEntry] = []

    def spawn(self, x: float, y: float, amount: float, is_heal: bool) -> EffectEntry:
        entry = EffectEntry(
            x=x,
            y=y - SPAWN_OFFSET_Y,
            amount=max(0, math.floor(amount)),
            is_heal=is_heal,
        )
        self._entries.append(entry)
        return entry

    def update(self, delta_ms: float) -> None:
        """Age every entry by ``delta_ms`` and drop the ones that have faded out."""
        survivors: List[EffectEntry] = []
        for entry in self._entries:
            entry.age_ms += delta_ms
            entry.y -= DRIFT_PER_SECOND * (delta_ms / 1000)
            entry.opacity = 1 - entry.age_ms / entry.ttl_ms
            if not entry.expired:
                survivors.append(entry)
        self._entries = survivors

    def clear(self) -> None:
        self._entries = []

    @property
    def entries(self) -> Tuple[EffectEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
