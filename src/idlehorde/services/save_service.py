"""Serialization helpers for the versioned save snapshot."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from idlehorde.data.repositories import HeroesRepository
from idlehorde.domain.entities import Hero
from idlehorde.domain.entities.hero import DEFAULT_SKILL_ID
from idlehorde.services.economy import EconomyLedger
from idlehorde.services.errors import SaveLoadError
from idlehorde.services.factories import DEFAULT_HERO_ID, create_starting_hero

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]


@dataclass(slots=True)
class LoadedGame:
    """Everything a session needs to resume from a snapshot."""

    hero: Hero
    stage: int
    ledger: EconomyLedger
    last_save_time: int | None


class SaveService:
    """Converts runtime state to/from a versioned payload.

    Loading never raises: an unusable payload yields ``None`` (treated as
    "no prior save") and individual bad fields fall back to defaults.
    """

    SAVE_VERSION = "1.0"

    def __init__(self, *, heroes_repo: HeroesRepository, default_hero_id: str = DEFAULT_HERO_ID) -> None:
        self._heroes_repo = heroes_repo
        self._default_hero_id = default_hero_id

    def serialize(self, *, hero: Hero, ledger: EconomyLedger, stage: int, saved_at_ms: int) -> SavePayload:
        return {
            "version": self.SAVE_VERSION,
            "lastSaveTime": saved_at_ms,
            "currentStage": stage,
            "heroes": [self._serialize_hero(hero)],
            "resources": ledger.to_payload(saved_at_ms),
        }

    def deserialize(self, payload: Any) -> LoadedGame | None:
        """Rehydrate a game from a persisted payload, or return None."""
        try:
            return self._deserialize(payload)
        except SaveLoadError as exc:
            logger.warning("Ignoring unusable save: %s", exc)
            return None

    def _deserialize(self, payload: Any) -> LoadedGame:
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("version")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported save version: {version!r}")

        stage = self._coerce_positive_int(payload.get("currentStage"), "currentStage", default=1)
        hero = self._coerce_hero(payload.get("heroes"))

        resources = payload.get("resources")
        if not isinstance(resources, Mapping):
            resources = None
        ledger = EconomyLedger.from_payload(resources, stage)

        last_save_time = self._coerce_timestamp(payload.get("lastSaveTime"))
        if last_save_time is None and resources is not None:
            last_save_time = self._coerce_timestamp(resources.get("lastSaveTime"))

        return LoadedGame(hero=hero, stage=stage, ledger=ledger, last_save_time=last_save_time)

    @staticmethod
    def _serialize_hero(hero: Hero) -> Dict[str, Any]:
        return {
            "id": hero.id,
            "name": hero.name,
            "role": hero.role,
            "level": hero.level,
            "baseHealth": hero.base_health,
            "baseAttack": hero.base_attack,
            "baseDefense": hero.base_defense,
            "unlockedSkills": list(hero.unlocked_skills),
        }

    def _coerce_hero(self, value: Any) -> Hero:
        # Only the first entry is read; the list shape is kept for older saves.
        if not isinstance(value, list) or not value:
            logger.info("Save has no hero; starting a fresh one.")
            return create_starting_hero(self._heroes_repo, self._default_hero_id)
        try:
            return self._build_hero(value[0])
        except SaveLoadError as exc:
            logger.warning("Hero entry is corrupt (%s); starting a fresh one.", exc)
            return create_starting_hero(self._heroes_repo, self._default_hero_id)

    def _build_hero(self, value: Any) -> Hero:
        if not isinstance(value, Mapping):
            raise SaveLoadError("heroes[0] must be an object.")
        return Hero.create(
            hero_id=self._coerce_non_negative_int(value.get("id"), "heroes[0].id", default=0),
            name=self._require_str(value.get("name"), "heroes[0].name"),
            role=self._coerce_str(value.get("role"), default="Tank"),
            base_health=self._require_positive_int(value.get("baseHealth"), "heroes[0].baseHealth"),
            base_attack=self._require_positive_int(value.get("baseAttack"), "heroes[0].baseAttack"),
            base_defense=self._require_positive_int(value.get("baseDefense"), "heroes[0].baseDefense"),
            level=self._coerce_positive_int(value.get("level"), "heroes[0].level", default=1),
            unlocked_skills=self._coerce_skills(value.get("unlockedSkills")),
        )

    @staticmethod
    def _coerce_skills(value: Any) -> List[str]:
        if not isinstance(value, list):
            return [DEFAULT_SKILL_ID]
        skills = [entry for entry in value if isinstance(entry, str) and entry.strip()]
        return skills or [DEFAULT_SKILL_ID]

    @staticmethod
    def _is_int(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str) or not value:
            raise SaveLoadError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _coerce_str(value: Any, *, default: str) -> str:
        return value if isinstance(value, str) and value else default

    def _require_positive_int(self, value: Any, context: str) -> int:
        if not self._is_int(value) or value < 1:
            raise SaveLoadError(f"{context} must be a positive integer.")
        return value

    def _coerce_positive_int(self, value: Any, context: str, *, default: int) -> int:
        if self._is_int(value) and value >= 1:
            return value
        if value is not None:
            logger.warning("%s has invalid value %r; using %s.", context, value, default)
        return default

    def _coerce_non_negative_int(self, value: Any, context: str, *, default: int) -> int:
        if self._is_int(value) and value >= 0:
            return value
        if value is not None:
            logger.warning("%s has invalid value %r; using %s.", context, value, default)
        return default

    def _coerce_timestamp(self, value: Any) -> int | None:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            return int(value)
        return None
