"""Hero skill effects and cooldown tracking.

Skill behaviour is a closed set of effect kinds dispatched by
``apply_effect``; definitions (names, cooldowns, power) come from
``skills.json`` through the skills repository.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from idlehorde.core.rng import RNG
from idlehorde.domain.defs import SkillDef
from idlehorde.domain.entities import Combatant, Enemy, Hero

logger = logging.getLogger(__name__)

VARIANCE_MIN = 0.9
VARIANCE_SPREAD = 0.2


class SkillEffectKind(Enum):
    FIREBALL = "fireball"
    CLEAVE = "cleave"
    HEAL = "heal"


@dataclass(slots=True)
class EffectHit:
    """One number produced by a skill: damage dealt to, or health restored on, ``target``."""

    target: Combatant
    amount: int
    is_heal: bool


@dataclass(slots=True)
class EffectOutcome:
    kind: SkillEffectKind
    hits: List[EffectHit] = field(default_factory=list)

    @property
    def total_amount(self) -> int:
        return sum(hit.amount for hit in self.hits)


def roll_damage(attack: float, rng: RNG) -> int:
    """Apply the +/-10% variance shared by basic attacks and skills."""
    return math.floor(attack * (VARIANCE_MIN + rng.random() * VARIANCE_SPREAD))


def apply_effect(
    kind: SkillEffectKind,
    caster: Hero,
    targets: Sequence[Enemy],
    rng: RNG,
    *,
    power: float,
) -> EffectOutcome:
    """Resolve a skill against the given targets and report every hit."""
    outcome = EffectOutcome(kind=kind)
    living = [target for target in targets if target.is_alive]
    match kind:
        case SkillEffectKind.FIREBALL:
            if living:
                target = living[0]
                damage = roll_damage(math.floor(caster.stats.attack * power), rng)
                outcome.hits.append(EffectHit(target=target, amount=target.take_damage(damage), is_heal=False))
        case SkillEffectKind.CLEAVE:
            for target in living:
                damage = roll_damage(math.floor(caster.stats.attack * power), rng)
                outcome.hits.append(EffectHit(target=target, amount=target.take_damage(damage), is_heal=False))
        case SkillEffectKind.HEAL:
            restored = caster.restore_health(math.floor(caster.stats.max_health * power))
            outcome.hits.append(EffectHit(target=caster, amount=restored, is_heal=True))
        case _:
            raise ValueError(f"Unsupported skill effect kind: {kind!r}")
    return outcome


class SkillBook:
    """Cooldown state for the skills a hero has unlocked."""

    def __init__(self, skills: Iterable[SkillDef] = ()) -> None:
        self._skills: Dict[str, SkillDef] = {}
        self._cooldowns: Dict[str, float] = {}
        for skill in skills:
            self.add(skill)

    @classmethod
    def for_hero(cls, hero: Hero, available: Dict[str, SkillDef], default_skill_id: str = "fireball") -> "SkillBook":
        """Build a book from the hero's unlocked ids, skipping unknown ones."""
        book = cls()
        for skill_id in hero.unlocked_skills:
            skill = available.get(skill_id)
            if skill is None:
                logger.warning("Unknown skill id %r on hero %s; skipping.", skill_id, hero.name)
                continue
            book.add(skill)
        if not book.skill_ids and default_skill_id in available:
            book.add(available[default_skill_id])
        return book

    def add(self, skill: SkillDef) -> bool:
        if skill.id in self._skills:
            return False
        self._skills[skill.id] = skill
        self._cooldowns[skill.id] = 0.0
        return True

    @property
    def skill_ids(self) -> Tuple[str, ...]:
        return tuple(self._skills)

    def get(self, skill_id: str) -> SkillDef | None:
        return self._skills.get(skill_id)

    def update(self, delta_ms: float) -> None:
        for skill_id, remaining in self._cooldowns.items():
            if remaining > 0:
                self._cooldowns[skill_id] = max(0.0, remaining - delta_ms)

    def can_use(self, skill_id: str) -> bool:
        return skill_id in self._skills and self._cooldowns[skill_id] <= 0

    def trigger(self, skill_id: str) -> None:
        """Start the skill's cooldown."""
        self._cooldowns[skill_id] = float(self._skills[skill_id].cooldown_ms)

    def remaining_ms(self, skill_id: str) -> float:
        return self._cooldowns.get(skill_id, 0.0)

    def cooldown_percent(self, skill_id: str) -> float:
        skill = self._skills.get(skill_id)
        if skill is None or skill.cooldown_ms == 0:
            return 0.0
        return self._cooldowns[skill_id] / skill.cooldown_ms

    def cooldown_seconds(self, skill_id: str) -> int:
        return math.ceil(self.remaining_ms(skill_id) / 1000)

    def reset(self) -> None:
        for skill_id in self._cooldowns:
            self._cooldowns[skill_id] = 0.0
