"""Fixed-interval combat scheduler for the hero versus the horde."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Tuple

from idlehorde.core.rng import RNG
from idlehorde.domain.adventure_log import AdventureLog
from idlehorde.domain.defs import SkillDef
from idlehorde.domain.effects import EffectEntry, EffectFeed
from idlehorde.domain.entities import Combatant, Enemy, Hero
from idlehorde.domain.entities.hero import normalize_skill_id
from idlehorde.domain.skills import EffectOutcome, SkillBook, SkillEffectKind, apply_effect, roll_damage
from idlehorde.services.wave_controller import WaveController

logger = logging.getLogger(__name__)

ATTACK_INTERVAL_MS = 1000.0


@dataclass(slots=True)
class CombatantView:
    """Read-only snapshot of a combatant for rendering."""

    id: int
    name: str
    health: int
    max_health: int
    attack: int
    defense: int
    is_alive: bool
    health_percent: float


@dataclass(slots=True)
class BattleView:
    """Presentation view for the current battle state."""

    stage: int
    wave: int
    enemies_defeated: int
    hero: CombatantView | None
    enemies: List[CombatantView]
    effects: Tuple[EffectEntry, ...]
    is_active: bool
    is_paused: bool


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class BattleStartedEvent(CombatEvent):
    stage: int
    enemy_count: int


@dataclass(slots=True)
class AttackResolvedEvent(CombatEvent):
    attacker_id: int
    attacker_name: str
    target_id: int
    target_name: str
    damage: int
    target_health: int


@dataclass(slots=True)
class EnemyDefeatedEvent(CombatEvent):
    enemy_id: int
    enemy_kind: str


@dataclass(slots=True)
class WaveSpawnedEvent(CombatEvent):
    stage: int
    wave: int


@dataclass(slots=True)
class HeroRespawnedEvent(CombatEvent):
    hero_name: str


@dataclass(slots=True)
class SkillUsedEvent(CombatEvent):
    skill_id: str
    skill_name: str
    total_amount: int
    targets_hit: int


@dataclass(slots=True)
class SkillUseResult:
    skill_id: str
    used: bool
    reason: str | None = None
    outcome: EffectOutcome | None = None
    events: List[CombatEvent] = field(default_factory=list)


def _fixed_speed() -> int:
    return 1


class CombatEngine:
    """Drives the horde battle one ``update`` call at a time.

    Rounds fire on a reset-on-fire timer: once the accumulated time reaches
    the effective interval a single round runs and the accumulator goes
    back to zero, so a long tick never produces more than one round.
    Target selection and damage variance are the only random draws and
    both come from the injected RNG.
    """

    def __init__(
        self,
        rng: RNG,
        *,
        waves: WaveController | None = None,
        effects: EffectFeed | None = None,
        adventure_log: AdventureLog | None = None,
        skills: Mapping[str, SkillDef] | None = None,
        speed_provider: Callable[[], int] = _fixed_speed,
    ) -> None:
        self._rng = rng
        self.waves = waves or WaveController()
        self.effects = effects or EffectFeed()
        self.adventure_log = adventure_log
        self._available_skills: Dict[str, SkillDef] = dict(skills or {})
        self._speed_provider = speed_provider
        self.hero: Hero | None = None
        self.skill_book = SkillBook()
        self.is_paused = False
        self.time_since_last_attack = 0.0

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def start_battle(self, hero: Hero, stage: int) -> List[CombatEvent]:
        if self.hero is not hero:
            self.skill_book = SkillBook.for_hero(hero, self._available_skills)
        self.hero = hero
        self.waves.start_battle(hero, stage)
        self.is_paused = False
        self.time_since_last_attack = 0.0
        self.effects.clear()
        if self.adventure_log is not None:
            self.adventure_log.log_stage(stage)
            self.adventure_log.log_wave(self.waves.current_wave)
        return [BattleStartedEvent(stage=stage, enemy_count=len(self.waves.enemies))]

    def stop_battle(self) -> None:
        self.waves.stop_battle()

    def toggle_pause(self) -> bool:
        self.is_paused = not self.is_paused
        return self.is_paused

    @property
    def is_active(self) -> bool:
        return self.waves.is_active

    @property
    def effective_interval_ms(self) -> float:
        return ATTACK_INTERVAL_MS / self._speed_provider()

    # -----------------------
    # Tick
    # -----------------------
    def update(self, delta_ms: float) -> List[CombatEvent]:
        """Advance the battle by one tick and return what happened.

        Order within a tick: skill cooldowns, attack timer (at most one
        round), effect ageing, defeat/respawn reconciliation, hero respawn.
        """
        hero = self.hero
        if hero is None or not self.waves.is_active or self.is_paused:
            return []

        events: List[CombatEvent] = []
        self.skill_book.update(delta_ms)

        self.time_since_last_attack += delta_ms
        if self.time_since_last_attack >= self.effective_interval_ms:
            events.extend(self.execute_round())
            self.time_since_last_attack = 0.0

        self.effects.update(delta_ms)
        events.extend(self._reconcile_roster())

        if not hero.is_alive:
            events.append(self.respawn_hero())
        return events

    def execute_round(self) -> List[CombatEvent]:
        """Hero strikes first, then every enemy still standing strikes back."""
        events: List[CombatEvent] = []
        if self.hero is not None and self.hero.is_alive:
            event = self.hero_attack(self.hero)
            if event is not None:
                events.append(event)
        for enemy in list(self.waves.enemies):
            if enemy.is_alive:
                event = self.enemy_attack(enemy)
                if event is not None:
                    events.append(event)
        return events

    def hero_attack(self, hero: Hero) -> AttackResolvedEvent | None:
        living = self.waves.living_enemies()
        if not living:
            return None
        target = self._rng.choice(living)
        return self._resolve_attack(hero, target)

    def enemy_attack(self, enemy: Enemy) -> AttackResolvedEvent | None:
        if self.hero is None or not self.hero.is_alive:
            return None
        return self._resolve_attack(enemy, self.hero)

    def respawn_hero(self) -> HeroRespawnedEvent:
        assert self.hero is not None
        self.hero.heal()
        if self.adventure_log is not None:
            self.adventure_log.log_respawn(self.hero.name)
        logger.debug("%s respawned on stage %s", self.hero.name, self.waves.current_stage)
        return HeroRespawnedEvent(hero_name=self.hero.name)

    # -----------------------
    # Skills
    # -----------------------
    def unlock_skill(self, skill_id: str) -> bool:
        """Make a known skill usable by the current hero."""
        skill = self._available_skills.get(normalize_skill_id(skill_id))
        if skill is None or self.hero is None:
            return False
        self.hero.unlock_skill(skill_id)
        return self.skill_book.add(skill)

    def ready_skills(self) -> List[str]:
        return [skill_id for skill_id in self.skill_book.skill_ids if self.skill_book.can_use(skill_id)]

    def use_skill(self, skill_id: str) -> SkillUseResult:
        skill_id = normalize_skill_id(skill_id)
        skill = self.skill_book.get(skill_id)
        if skill is None:
            return SkillUseResult(skill_id=skill_id, used=False, reason="unknown")
        if self.hero is None or not self.waves.is_active or self.is_paused:
            return SkillUseResult(skill_id=skill_id, used=False, reason="inactive")
        if not self.skill_book.can_use(skill_id):
            return SkillUseResult(skill_id=skill_id, used=False, reason="cooldown")

        outcome = apply_effect(
            skill.effect_kind,
            self.hero,
            self.waves.living_enemies(),
            self._rng,
            power=skill.power,
        )
        self.skill_book.trigger(skill_id)
        for hit in outcome.hits:
            self.effects.spawn(hit.target.x, hit.target.y, hit.amount, hit.is_heal)

        if self.adventure_log is not None:
            if skill.effect_kind is SkillEffectKind.HEAL:
                self.adventure_log.log_heal(self.hero.name, outcome.total_amount)
            else:
                self.adventure_log.log_skill(self.hero.name, skill.name, outcome.total_amount)

        event = SkillUsedEvent(
            skill_id=skill.id,
            skill_name=skill.name,
            total_amount=outcome.total_amount,
            targets_hit=len(outcome.hits),
        )
        return SkillUseResult(skill_id=skill_id, used=True, outcome=outcome, events=[event])

    # -----------------------
    # Views
    # -----------------------
    def get_battle_view(self) -> BattleView:
        return BattleView(
            stage=self.waves.current_stage,
            wave=self.waves.current_wave,
            enemies_defeated=self.waves.enemies_defeated,
            hero=self._to_view(self.hero) if self.hero is not None else None,
            enemies=[self._to_view(enemy) for enemy in self.waves.enemies],
            effects=self.effects.entries,
            is_active=self.waves.is_active,
            is_paused=self.is_paused,
        )

    # -----------------------
    # Internals
    # -----------------------
    def _resolve_attack(self, attacker: Combatant, target: Combatant) -> AttackResolvedEvent:
        damage = roll_damage(attacker.stats.attack, self._rng)
        actual = target.take_damage(damage)
        self.effects.spawn(target.x, target.y, actual, False)
        return AttackResolvedEvent(
            attacker_id=attacker.id,
            attacker_name=attacker.name,
            target_id=target.id,
            target_name=target.name,
            damage=actual,
            target_health=target.stats.health,
        )

    def _reconcile_roster(self) -> List[CombatEvent]:
        events: List[CombatEvent] = []
        wave_before = self.waves.current_wave
        for enemy in self.waves.check_enemy_respawn():
            events.append(EnemyDefeatedEvent(enemy_id=enemy.id, enemy_kind=enemy.kind))
            if self.adventure_log is not None:
                self.adventure_log.log_enemy_defeated(enemy.kind)
        if self.waves.current_wave != wave_before:
            events.append(WaveSpawnedEvent(stage=self.waves.current_stage, wave=self.waves.current_wave))
            if self.adventure_log is not None:
                self.adventure_log.log_wave(self.waves.current_wave)
        return events

    @staticmethod
    def _to_view(combatant: Combatant) -> CombatantView:
        return CombatantView(
            id=combatant.id,
            name=combatant.name,
            health=combatant.stats.health,
            max_health=combatant.stats.max_health,
            attack=combatant.stats.attack,
            defense=combatant.stats.defense,
            is_alive=combatant.is_alive,
            health_percent=combatant.health_percent(),
        )
