"""Hero runtime model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from idlehorde.domain import stat_model

from .combatant import Combatant

DEFAULT_SKILL_ID = "fireball"


def normalize_skill_id(skill_id: str) -> str:
    """Skill ids are stored lower-case, matching the keys in skills.json."""
    return skill_id.strip().lower()


@dataclass(slots=True)
class Hero(Combatant):
    """The player's single hero. Base stats never change; level drives growth."""

    role: str
    level: int
    base_health: int
    base_attack: int
    base_defense: int
    unlocked_skills: List[str] = field(default_factory=lambda: [DEFAULT_SKILL_ID])

    @classmethod
    def create(
        cls,
        *,
        hero_id: int,
        name: str,
        role: str,
        base_health: int,
        base_attack: int,
        base_defense: int,
        level: int = 1,
        unlocked_skills: Iterable[str] | None = None,
    ) -> "Hero":
        """Build a full-health hero with stats derived from its level."""
        skills: List[str] = []
        for skill_id in unlocked_skills if unlocked_skills is not None else (DEFAULT_SKILL_ID,):
            normalized = normalize_skill_id(skill_id)
            if normalized not in skills:
                skills.append(normalized)
        return cls(
            id=hero_id,
            name=name,
            stats=stat_model.hero_stats(base_health, base_attack, base_defense, level),
            role=role,
            level=level,
            base_health=base_health,
            base_attack=base_attack,
            base_defense=base_defense,
            unlocked_skills=skills,
        )

    @property
    def upgrade_cost(self) -> int:
        return stat_model.upgrade_cost(self.level)

    def upgrade(self) -> None:
        """Gain a level; current health rises by exactly the max-health gain."""
        old_max_health = self.stats.max_health
        self.level += 1
        self.stats.max_health = stat_model.effective_max_health(self.base_health, self.level)
        self.stats.attack = stat_model.effective_attack(self.base_attack, self.level)
        self.stats.defense = stat_model.effective_defense(self.base_defense, self.level)
        self.stats.health = min(
            self.stats.max_health,
            self.stats.health + (self.stats.max_health - old_max_health),
        )

    def unlock_skill(self, skill_id: str) -> bool:
        """Unlock a skill; returns False when it was already known."""
        skill_id = normalize_skill_id(skill_id)
        if skill_id in self.unlocked_skills:
            return False
        self.unlocked_skills.append(skill_id)
        return True

    def has_skill(self, skill_id: str) -> bool:
        return normalize_skill_id(skill_id) in self.unlocked_skills
