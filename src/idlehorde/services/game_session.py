"""Session object wiring the hero, combat, economy and persistence together."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List

from idlehorde.core.rng import RNG
from idlehorde.core.types import VALID_SPEED_MULTIPLIERS
from idlehorde.data.repositories import HeroesRepository, SkillsRepository
from idlehorde.domain import stat_model
from idlehorde.domain.adventure_log import AdventureLog
from idlehorde.domain.entities import Hero
from idlehorde.domain.entities.hero import normalize_skill_id
from idlehorde.services.combat_engine import CombatEngine, CombatEvent
from idlehorde.services.economy import EconomyLedger, OfflineReward
from idlehorde.services.factories import create_starting_hero
from idlehorde.services.save_service import LoadedGame, SavePayload, SaveService

logger = logging.getLogger(__name__)

AUTOSAVE_INTERVAL_MS = 30_000
OFFLINE_REWARD_THRESHOLD_MS = 60_000

Clock = Callable[[], int]
SaveSink = Callable[[SavePayload], object]


def epoch_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class UpgradeResult:
    success: bool
    cost: int
    new_level: int


@dataclass(frozen=True, slots=True)
class StageAdvanceResult:
    cleared_stage: int
    new_stage: int
    gold_reward: int


class GameSession:
    """Holds every piece of live game state and is passed explicitly to drivers.

    The driver calls ``update`` once per frame. ``on_save`` receives every
    snapshot produced by autosave, upgrades and stage advances.
    """

    def __init__(
        self,
        *,
        hero: Hero,
        ledger: EconomyLedger,
        stage: int,
        save_service: SaveService,
        skills_repo: SkillsRepository,
        rng: RNG,
        clock: Clock = epoch_ms,
        on_save: SaveSink | None = None,
        adventure_log: AdventureLog | None = None,
        speed_multiplier: int = 1,
        autosave_interval_ms: int = AUTOSAVE_INTERVAL_MS,
    ) -> None:
        if stage < 1:
            raise ValueError("Stage must be at least 1.")
        self.hero = hero
        self.ledger = ledger
        self.stage = stage
        self.adventure_log = adventure_log or AdventureLog()
        self._save_service = save_service
        self._clock = clock
        self._on_save = on_save
        self._autosave_interval_ms = autosave_interval_ms
        self._ms_since_save = 0.0
        self._skills = {skill.id: skill for skill in skills_repo.all()}
        self.offline_reward: OfflineReward | None = None
        self.speed_multiplier = 1
        self.set_speed_multiplier(speed_multiplier)
        self.engine = CombatEngine(
            rng,
            adventure_log=self.adventure_log,
            skills=self._skills,
            speed_provider=lambda: self.speed_multiplier,
        )
        self.ledger.update_idle_rate(stage)

    # -----------------------
    # Construction
    # -----------------------
    @classmethod
    def new_game(
        cls,
        *,
        heroes_repo: HeroesRepository,
        skills_repo: SkillsRepository,
        rng: RNG,
        **kwargs,
    ) -> "GameSession":
        hero = create_starting_hero(heroes_repo)
        return cls(
            hero=hero,
            ledger=EconomyLedger(stage=1),
            stage=1,
            save_service=SaveService(heroes_repo=heroes_repo),
            skills_repo=skills_repo,
            rng=rng,
            **kwargs,
        )

    @classmethod
    def from_save(
        cls,
        loaded: LoadedGame | None,
        *,
        heroes_repo: HeroesRepository,
        skills_repo: SkillsRepository,
        rng: RNG,
        **kwargs,
    ) -> "GameSession":
        """Resume a loaded game, or start fresh when there is no usable save."""
        if loaded is None:
            return cls.new_game(heroes_repo=heroes_repo, skills_repo=skills_repo, rng=rng, **kwargs)
        session = cls(
            hero=loaded.hero,
            ledger=loaded.ledger,
            stage=loaded.stage,
            save_service=SaveService(heroes_repo=heroes_repo),
            skills_repo=skills_repo,
            rng=rng,
            **kwargs,
        )
        if loaded.last_save_time is not None:
            session.apply_offline_reward(loaded.last_save_time)
        return session

    # -----------------------
    # Driver API
    # -----------------------
    def start(self) -> List[CombatEvent]:
        return self.engine.start_battle(self.hero, self.stage)

    def update(self, delta_ms: float) -> List[CombatEvent]:
        events = self.engine.update(delta_ms)
        self.ledger.update(delta_ms)
        self._ms_since_save += delta_ms
        if self._ms_since_save >= self._autosave_interval_ms:
            self.save()
        return events

    def toggle_pause(self) -> bool:
        return self.engine.toggle_pause()

    def set_speed_multiplier(self, multiplier: int) -> None:
        if multiplier not in VALID_SPEED_MULTIPLIERS:
            raise ValueError(f"Speed multiplier must be one of {VALID_SPEED_MULTIPLIERS}, got {multiplier}.")
        self.speed_multiplier = multiplier

    def upgrade_hero(self) -> UpgradeResult:
        cost = self.hero.upgrade_cost
        if not self.ledger.debit(cost):
            logger.info("Upgrade rejected: %s gold needed, %s available", cost, self.ledger.gold_display)
            return UpgradeResult(success=False, cost=cost, new_level=self.hero.level)
        self.hero.upgrade()
        self.adventure_log.log_upgrade(self.hero.name, self.hero.level)
        logger.info("%s upgraded to level %s for %s gold", self.hero.name, self.hero.level, cost)
        self.save()
        return UpgradeResult(success=True, cost=cost, new_level=self.hero.level)

    def advance_stage(self) -> StageAdvanceResult:
        cleared = self.stage
        reward = stat_model.stage_gold_reward(cleared)
        self.ledger.credit(reward)
        self.stage += 1
        self.ledger.update_idle_rate(self.stage)
        logger.info("Stage %s cleared for %s gold; advancing to stage %s", cleared, reward, self.stage)
        self.save()
        self.engine.start_battle(self.hero, self.stage)
        return StageAdvanceResult(cleared_stage=cleared, new_stage=self.stage, gold_reward=reward)

    def unlock_skill(self, skill_id: str) -> bool:
        """Teach the hero a known skill; returns False for unknown or already known ids.

        Before the first battle only the hero changes; ``start`` builds the
        skill book from the hero's unlocked skills.
        """
        skill_id = normalize_skill_id(skill_id)
        if skill_id not in self._skills:
            return False
        unlocked = self.hero.unlock_skill(skill_id)
        if self.engine.hero is self.hero:
            self.engine.unlock_skill(skill_id)
        return unlocked

    def apply_offline_reward(self, last_save_time: int) -> OfflineReward | None:
        """Credit AFK gold when the player has been away for more than a minute."""
        elapsed = self._clock() - last_save_time
        if elapsed <= OFFLINE_REWARD_THRESHOLD_MS:
            return None
        reward = self.ledger.calculate_offline_reward(elapsed, self.stage)
        self.ledger.credit(reward.gold)
        self.offline_reward = reward
        self.adventure_log.log_offline_reward(reward.gold, reward.formatted_duration)
        logger.info("Offline reward: %s gold for %s away", reward.gold, reward.formatted_duration)
        return reward

    # -----------------------
    # Persistence
    # -----------------------
    def snapshot(self) -> SavePayload:
        return self._save_service.serialize(
            hero=self.hero,
            ledger=self.ledger,
            stage=self.stage,
            saved_at_ms=self._clock(),
        )

    def save(self) -> SavePayload:
        payload = self.snapshot()
        self._ms_since_save = 0.0
        if self._on_save is not None:
            self._on_save(payload)
        logger.debug("Snapshot taken at stage %s", self.stage)
        return payload
