"""Definition dataclasses loaded from JSON."""

from .hero_def import HeroDef
from .skill_def import SkillDef

__all__ = ["HeroDef", "SkillDef"]
