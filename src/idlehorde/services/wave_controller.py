"""Enemy roster management for endless horde battles."""
from __future__ import annotations

import logging
from typing import List, Literal

from idlehorde.domain import stat_model
from idlehorde.domain.entities import Enemy, Hero
from idlehorde.services.factories import create_enemy_for_stage

logger = logging.getLogger(__name__)

WaveState = Literal["idle", "active"]


class WaveController:
    """Owns the live enemies for the active stage and refills them as they fall.

    There is no terminal state: once started, the roster refills forever
    until ``stop_battle`` returns the controller to idle.
    """

    def __init__(self) -> None:
        self.state: WaveState = "idle"
        self.current_stage = 1
        self.current_wave = 1
        self.max_concurrent_enemies = stat_model.max_concurrent_enemies(1)
        self.enemies_defeated = 0
        self.enemies: List[Enemy] = []

    @property
    def is_active(self) -> bool:
        return self.state == "active"

    def start_battle(self, hero: Hero, stage: int) -> None:
        self.max_concurrent_enemies = stat_model.max_concurrent_enemies(stage)
        self.current_stage = stage
        self.current_wave = 1
        self.enemies_defeated = 0
        self.enemies = []
        hero.heal()
        self.spawn_wave()
        self.state = "active"
        logger.info(
            "Horde battle started: stage %s with %s enemies", stage, self.max_concurrent_enemies
        )

    def stop_battle(self) -> None:
        self.state = "idle"

    def spawn_wave(self) -> List[Enemy]:
        """Fill the roster up to capacity and return the newly spawned enemies."""
        spawned: List[Enemy] = []
        while len(self.enemies) < self.max_concurrent_enemies:
            # Ids are positional and get reused once a slot frees up.
            enemy = create_enemy_for_stage(len(self.enemies), self.current_stage)
            self.enemies.append(enemy)
            spawned.append(enemy)
        return spawned

    def living_enemies(self) -> List[Enemy]:
        return [enemy for enemy in self.enemies if enemy.is_alive]

    def check_enemy_respawn(self) -> List[Enemy]:
        """Remove defeated enemies and refill the roster.

        The wave counter advances at most once per call, however many
        enemies fell. Returns the enemies that were removed.
        """
        defeated = [enemy for enemy in self.enemies if not enemy.is_alive]
        if defeated:
            self.enemies = [enemy for enemy in self.enemies if enemy.is_alive]
            self.enemies_defeated += len(defeated)

        if len(self.enemies) < self.max_concurrent_enemies:
            self.current_wave += 1
            self.spawn_wave()
            logger.debug("Wave %s spawned on stage %s", self.current_wave, self.current_stage)
        return defeated
