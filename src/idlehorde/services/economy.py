"""Gold balance, idle accrual and offline (AFK) rewards."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from idlehorde.domain import stat_model

logger = logging.getLogger(__name__)

STARTING_GOLD = 1000.0
MAX_OFFLINE_MS = 2 * 60 * 60 * 1000


@dataclass(frozen=True, slots=True)
class OfflineReward:
    gold: int
    formatted_duration: str
    capped_ms: int


def format_duration(seconds: float) -> str:
    """Render a duration as ``Ns``, ``Nm Ns`` or ``Nh Nm``."""
    if seconds < 60:
        return f"{math.floor(seconds)}s"
    if seconds < 3600:
        return f"{math.floor(seconds / 60)}m {math.floor(seconds % 60)}s"
    return f"{math.floor(seconds / 3600)}h {math.floor((seconds % 3600) / 60)}m"


def calculate_offline_reward(elapsed_ms: float, stage: int) -> OfflineReward:
    """Gold earned while away, with the elapsed time capped at two hours."""
    capped_ms = min(max(0, int(elapsed_ms)), MAX_OFFLINE_MS)
    capped_seconds = capped_ms / 1000
    gold = math.floor(stat_model.offline_gold_per_second(stage) * capped_seconds)
    return OfflineReward(gold=gold, formatted_duration=format_duration(capped_seconds), capped_ms=capped_ms)


class EconomyLedger:
    """Holds the gold accumulator.

    The balance is kept as a float so fractional idle income is never lost
    between ticks; it is only floored for display and spend checks.
    """

    def __init__(self, gold: float = STARTING_GOLD, stage: int = 1) -> None:
        self._gold = float(gold)
        self._gold_per_second = 0.0
        self.update_idle_rate(stage)

    @property
    def gold(self) -> float:
        return self._gold

    @property
    def gold_display(self) -> int:
        return math.floor(self._gold)

    @property
    def gold_per_second(self) -> float:
        return self._gold_per_second

    def update_idle_rate(self, stage: int) -> None:
        """Recompute passive income; call whenever the stage changes."""
        self._gold_per_second = stat_model.passive_gold_per_second(stage)

    def update(self, delta_ms: float) -> None:
        self._gold += self._gold_per_second * (delta_ms / 1000)

    def credit(self, amount: float) -> None:
        if amount < 0:
            raise ValueError("Cannot credit a negative amount.")
        self._gold += amount

    def debit(self, amount: float) -> bool:
        """Spend gold; returns False and leaves the balance alone when short."""
        if amount < 0:
            raise ValueError("Cannot debit a negative amount.")
        if amount > self.gold_display:
            return False
        self._gold -= amount
        return True

    def calculate_offline_reward(self, elapsed_ms: float, stage: int) -> OfflineReward:
        return calculate_offline_reward(elapsed_ms, stage)

    def to_payload(self, saved_at_ms: int) -> Dict[str, Any]:
        return {
            "gold": self._gold,
            "goldPerSecond": self._gold_per_second,
            "lastSaveTime": saved_at_ms,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None, stage: int) -> "EconomyLedger":
        """Rebuild a ledger; the rate always comes from the stage, not the payload."""
        gold = STARTING_GOLD
        if payload is not None:
            raw_gold = payload.get("gold")
            if isinstance(raw_gold, (int, float)) and not isinstance(raw_gold, bool) and raw_gold >= 0:
                gold = float(raw_gold)
            else:
                logger.warning("Save has no usable gold balance; using starting gold.")
        return cls(gold=gold, stage=stage)
