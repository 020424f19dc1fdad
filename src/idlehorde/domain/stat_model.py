"""Deterministic stat scaling formulas for heroes, enemies and rewards."""
from __future__ import annotations

import math

from idlehorde.core.types import EnemyKind
from idlehorde.domain.entities.stats import Stats

# Hero growth is multiplicative on the base stat and truncated on read.
HEALTH_GROWTH_PER_LEVEL = 0.15
ATTACK_GROWTH_PER_LEVEL = 0.10
DEFENSE_GROWTH_PER_LEVEL = 0.08

UPGRADE_COST_BASE = 100
UPGRADE_COST_EXPONENT = 1.5

# Stage 1 enemy baseline and compounding per-stage multipliers.
ENEMY_BASE_HEALTH = 200
ENEMY_BASE_ATTACK = 25
ENEMY_BASE_DEFENSE = 10
ENEMY_HEALTH_SCALING = 1.20
ENEMY_ATTACK_SCALING = 1.15
ENEMY_DEFENSE_SCALING = 1.10

# Upper stage bound (inclusive) for each enemy band; anything above is a Dragon.
ENEMY_KIND_BANDS: tuple[tuple[int, EnemyKind], ...] = (
    (2, "Goblin"),
    (5, "Orc"),
    (8, "Skeleton"),
    (12, "Demon"),
)
TOP_ENEMY_KIND: EnemyKind = "Dragon"

MIN_CONCURRENT_ENEMIES = 3
MAX_CONCURRENT_ENEMIES = 5
STAGES_PER_EXTRA_ENEMY = 5

STAGE_GOLD_BASE = 50
STAGE_GOLD_SCALING = 1.1
GEMS_PER_STAGE = 2

# Live idle accrual. Tunable; offline accrual deliberately uses a steeper rate.
PASSIVE_GOLD_PER_STAGE = 0.5
OFFLINE_GOLD_PER_STAGE = 10


def _require_level(level: int) -> None:
    if level < 1:
        raise ValueError(f"Level must be at least 1, got {level}.")


def _require_stage(stage: int) -> None:
    if stage < 1:
        raise ValueError(f"Stage must be at least 1, got {stage}.")


def effective_max_health(base_health: int, level: int) -> int:
    _require_level(level)
    return math.floor(base_health * (1 + (level - 1) * HEALTH_GROWTH_PER_LEVEL))


def effective_attack(base_attack: int, level: int) -> int:
    _require_level(level)
    return math.floor(base_attack * (1 + (level - 1) * ATTACK_GROWTH_PER_LEVEL))


def effective_defense(base_defense: int, level: int) -> int:
    _require_level(level)
    return math.floor(base_defense * (1 + (level - 1) * DEFENSE_GROWTH_PER_LEVEL))


def upgrade_cost(level: int) -> int:
    """Gold needed to go from ``level`` to ``level + 1``."""
    _require_level(level)
    return math.floor(UPGRADE_COST_BASE * level**UPGRADE_COST_EXPONENT)


def hero_stats(base_health: int, base_attack: int, base_defense: int, level: int) -> Stats:
    """Return full-health stats for a hero of the given level."""
    max_health = effective_max_health(base_health, level)
    return Stats(
        max_health=max_health,
        health=max_health,
        attack=effective_attack(base_attack, level),
        defense=effective_defense(base_defense, level),
    )


def enemy_stats_for_stage(stage: int) -> Stats:
    """Return full-health enemy stats for a 1-indexed stage."""
    _require_stage(stage)
    steps = stage - 1
    max_health = math.floor(ENEMY_BASE_HEALTH * ENEMY_HEALTH_SCALING**steps)
    return Stats(
        max_health=max_health,
        health=max_health,
        attack=math.floor(ENEMY_BASE_ATTACK * ENEMY_ATTACK_SCALING**steps),
        defense=math.floor(ENEMY_BASE_DEFENSE * ENEMY_DEFENSE_SCALING**steps),
    )


def enemy_kind_for_stage(stage: int) -> EnemyKind:
    _require_stage(stage)
    for upper_bound, kind in ENEMY_KIND_BANDS:
        if stage <= upper_bound:
            return kind
    return TOP_ENEMY_KIND


def max_concurrent_enemies(stage: int) -> int:
    """Horde size: 3 enemies, one more every 5 stages, never above 5."""
    _require_stage(stage)
    return min(MAX_CONCURRENT_ENEMIES, MIN_CONCURRENT_ENEMIES + stage // STAGES_PER_EXTRA_ENEMY)


def stage_gold_reward(stage: int) -> int:
    _require_stage(stage)
    return math.floor(STAGE_GOLD_BASE * stage * STAGE_GOLD_SCALING**stage)


def stage_gem_reward(stage: int) -> int:
    _require_stage(stage)
    return stage * GEMS_PER_STAGE


def passive_gold_per_second(stage: int) -> float:
    _require_stage(stage)
    return stage * PASSIVE_GOLD_PER_STAGE


def offline_gold_per_second(stage: int) -> float:
    _require_stage(stage)
    return stage * OFFLINE_GOLD_PER_STAGE
