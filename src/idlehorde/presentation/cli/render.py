"""Shared CLI rendering helpers."""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from idlehorde.domain.adventure_log import LogEntry
from idlehorde.services.combat_engine import BattleView, CombatantView
from idlehorde.services.economy import EconomyLedger

_BAR_WIDTH = 20


def health_bar(percent: float, width: int = _BAR_WIDTH) -> str:
    """Return a fixed-width text health bar such as ``[#####-----]``."""
    clamped = min(1.0, max(0.0, percent))
    filled = math.ceil(clamped * width) if clamped > 0 else 0
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_combatant(view: CombatantView) -> str:
    status = "" if view.is_alive else " (down)"
    return (
        f"{view.name:<12} {health_bar(view.health_percent)} "
        f"{view.health}/{view.max_health} ATK {view.attack} DEF {view.defense}{status}"
    )


def format_battle_view(view: BattleView) -> List[str]:
    lines = [f"Stage {view.stage} - Wave {view.wave} - Defeated {view.enemies_defeated}"]
    if view.is_paused:
        lines.append("(paused)")
    if view.hero is not None:
        lines.append(format_combatant(view.hero))
    lines.extend(f"  {format_combatant(enemy)}" for enemy in view.enemies)
    return lines


def format_economy(ledger: EconomyLedger) -> str:
    return f"Gold {ledger.gold_display} (+{ledger.gold_per_second:g}/s)"


def format_log(entries: Sequence[LogEntry], limit: int = 10) -> List[str]:
    return [f"[{entry.timestamp}] {entry.message}" for entry in list(entries)[-limit:]]


def render_heading(title: str) -> None:
    print()
    print(f"=== {title} ===")


def render_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)
