"""Player-facing narrative log of the horde battle."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Deque, List

from idlehorde.core.types import LogEntryType

DEFAULT_MAX_ENTRIES = 100


def _wall_clock() -> str:
    return datetime.now().strftime("%H:%M:%S")


@dataclass(frozen=True, slots=True)
class LogEntry:
    entry_type: LogEntryType
    message: str
    timestamp: str


class AdventureLog:
    """Bounded list of log entries; the oldest entry is dropped once full."""

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        *,
        clock: Callable[[], str] = _wall_clock,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1.")
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)
        self._clock = clock

    def add(self, entry_type: LogEntryType, message: str) -> LogEntry:
        entry = LogEntry(entry_type=entry_type, message=message, timestamp=self._clock())
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def log_enemy_defeated(self, enemy_kind: str) -> LogEntry:
        return self.add("combat", f"Defeated {enemy_kind}")

    def log_stage(self, stage: int) -> LogEntry:
        return self.add("stage", f"Reached Stage {stage}!")

    def log_wave(self, wave: int) -> LogEntry:
        return self.add("combat", f"Wave {wave} incoming!")

    def log_skill(self, caster: str, skill_name: str, amount: int | None = None) -> LogEntry:
        suffix = f" for {amount} damage" if amount is not None else ""
        return self.add("skill", f"{caster} cast {skill_name}{suffix}!")

    def log_heal(self, caster: str, amount: int) -> LogEntry:
        return self.add("skill", f"{caster} healed for {amount} HP!")

    def log_respawn(self, hero_name: str) -> LogEntry:
        return self.add("story", f"{hero_name} respawned and continues the fight!")

    def log_upgrade(self, hero_name: str, level: int) -> LogEntry:
        return self.add("stage", f"{hero_name} upgraded to level {level}!")

    def log_offline_reward(self, gold: int, duration: str) -> LogEntry:
        return self.add("loot", f"Earned {gold} gold while away for {duration}")

    def log_story(self, message: str) -> LogEntry:
        return self.add("story", message)
