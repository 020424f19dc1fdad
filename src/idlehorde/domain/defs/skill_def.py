"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from idlehorde.domain.skills import SkillEffectKind


@dataclass(frozen=True, slots=True)
class SkillDef:
    """Describes a hero skill and its cooldown."""

    id: str
    name: str
    description: str
    cooldown_ms: int
    effect_kind: "SkillEffectKind"
    power: float
