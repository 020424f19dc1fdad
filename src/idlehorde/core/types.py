"""Shared type aliases for the core and domain layers."""
from typing import Literal, Tuple

EnemyKind = Literal["Goblin", "Orc", "Skeleton", "Demon", "Dragon"]
LogEntryType = Literal["combat", "loot", "stage", "skill", "story"]
SpeedMultiplier = Literal[1, 2, 4]

VALID_SPEED_MULTIPLIERS: Tuple[int, ...] = (1, 2, 4)

__all__ = ["EnemyKind", "LogEntryType", "SpeedMultiplier", "VALID_SPEED_MULTIPLIERS"]
