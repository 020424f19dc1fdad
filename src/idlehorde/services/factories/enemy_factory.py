"""Factory for creating stage-scaled horde enemies."""
from __future__ import annotations

from idlehorde.domain import stat_model
from idlehorde.domain.entities import Enemy


def create_enemy_for_stage(enemy_id: int, stage: int) -> Enemy:
    """Instantiate a full-health enemy of the kind and strength for ``stage``."""
    kind = stat_model.enemy_kind_for_stage(stage)
    return Enemy(
        id=enemy_id,
        name=kind,
        stats=stat_model.enemy_stats_for_stage(stage),
        kind=kind,
    )
