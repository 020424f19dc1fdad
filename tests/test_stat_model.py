from __future__ import annotations

import pytest

from idlehorde.domain import stat_model


def test_stage_five_enemy_stats() -> None:
    stats = stat_model.enemy_stats_for_stage(5)
    assert stats.max_health == 414
    assert stats.health == 414
    assert stats.attack == 43
    assert stats.defense == 14


def test_stage_one_enemy_uses_baseline() -> None:
    stats = stat_model.enemy_stats_for_stage(1)
    assert (stats.max_health, stats.attack, stats.defense) == (200, 25, 10)


@pytest.mark.parametrize(
    ("stage", "kind"),
    [
        (1, "Goblin"),
        (2, "Goblin"),
        (3, "Orc"),
        (5, "Orc"),
        (6, "Skeleton"),
        (7, "Skeleton"),
        (8, "Skeleton"),
        (9, "Demon"),
        (12, "Demon"),
        (13, "Dragon"),
        (40, "Dragon"),
    ],
)
def test_enemy_kind_band_boundaries(stage: int, kind: str) -> None:
    assert stat_model.enemy_kind_for_stage(stage) == kind


@pytest.mark.parametrize(("stage", "expected"), [(1, 3), (4, 3), (5, 4), (7, 4), (9, 4), (10, 5), (25, 5)])
def test_max_concurrent_enemies_scales_with_stage(stage: int, expected: int) -> None:
    assert stat_model.max_concurrent_enemies(stage) == expected


def test_hero_growth_formulas() -> None:
    assert stat_model.effective_max_health(500, 1) == 500
    assert stat_model.effective_max_health(500, 2) == 575
    assert stat_model.effective_attack(30, 2) == 33
    assert stat_model.effective_defense(25, 2) == 27
    assert stat_model.effective_attack(30, 11) == 60


def test_stat_growth_is_non_decreasing_in_level() -> None:
    for base in (1, 7, 25, 30, 500):
        previous = (0, 0, 0)
        for level in range(1, 60):
            current = (
                stat_model.effective_max_health(base, level),
                stat_model.effective_attack(base, level),
                stat_model.effective_defense(base, level),
            )
            assert all(now >= before for now, before in zip(current, previous))
            previous = current


def test_upgrade_cost_curve() -> None:
    assert stat_model.upgrade_cost(1) == 100
    assert stat_model.upgrade_cost(2) == 282
    assert stat_model.upgrade_cost(4) == 800


def test_stage_rewards() -> None:
    assert stat_model.stage_gold_reward(1) == 55
    assert stat_model.stage_gold_reward(5) == 402
    assert stat_model.stage_gold_reward(10) == 1296
    assert stat_model.stage_gem_reward(5) == 10


def test_live_and_offline_gold_rates_differ() -> None:
    assert stat_model.passive_gold_per_second(1) == 0.5
    assert stat_model.passive_gold_per_second(10) == 5.0
    assert stat_model.offline_gold_per_second(3) == 30


def test_hero_stats_start_at_full_health() -> None:
    stats = stat_model.hero_stats(500, 30, 25, 3)
    assert stats.health == stats.max_health == 650
    assert stats.attack == 36
    assert stats.defense == 28


@pytest.mark.parametrize("bad", [0, -3])
def test_invalid_stage_or_level_rejected(bad: int) -> None:
    with pytest.raises(ValueError):
        stat_model.enemy_stats_for_stage(bad)
    with pytest.raises(ValueError):
        stat_model.upgrade_cost(bad)
