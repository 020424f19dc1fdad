"""Tests for CLI rendering utilities."""
from idlehorde.domain.adventure_log import AdventureLog
from idlehorde.presentation.cli.render import format_battle_view, format_economy, format_log, health_bar
from idlehorde.services.combat_engine import BattleView, CombatantView
from idlehorde.services.economy import EconomyLedger


def _view(name: str, health: int, max_health: int) -> CombatantView:
    return CombatantView(
        id=0,
        name=name,
        health=health,
        max_health=max_health,
        attack=30,
        defense=25,
        is_alive=health > 0,
        health_percent=health / max_health,
    )


def test_health_bar_widths() -> None:
    assert health_bar(1.0, width=10) == "[##########]"
    assert health_bar(0.0, width=10) == "[----------]"
    assert health_bar(0.01, width=10) == "[#---------]"
    assert health_bar(2.0, width=4) == "[####]"


def test_battle_view_lines() -> None:
    view = BattleView(
        stage=3,
        wave=2,
        enemies_defeated=5,
        hero=_view("Bartimaeus", 250, 500),
        enemies=[_view("Orc", 0, 288)],
        effects=(),
        is_active=True,
        is_paused=True,
    )
    lines = format_battle_view(view)
    assert lines[0] == "Stage 3 - Wave 2 - Defeated 5"
    assert lines[1] == "(paused)"
    assert "250/500" in lines[2]
    assert lines[3].startswith("  Orc")
    assert lines[3].endswith("(down)")


def test_format_economy() -> None:
    assert format_economy(EconomyLedger(gold=1234.9, stage=3)) == "Gold 1234 (+1.5/s)"


def test_format_log_keeps_latest_entries() -> None:
    log = AdventureLog(clock=lambda: "10:00:00")
    for wave in range(1, 15):
        log.log_wave(wave)
    lines = format_log(log.entries(), limit=2)
    assert lines == ["[10:00:00] Wave 13 incoming!", "[10:00:00] Wave 14 incoming!"]
