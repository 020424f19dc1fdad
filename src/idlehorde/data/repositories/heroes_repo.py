"""Hero template repository."""
from __future__ import annotations

from typing import Dict

from idlehorde.data.repositories.base import RepositoryBase
from idlehorde.domain.defs import HeroDef

_REQUIRED_FIELDS = {"name", "role", "base_health", "base_attack", "base_defense"}


class HeroesRepository(RepositoryBase[HeroDef]):
    """Loads starting hero templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("heroes.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, HeroDef]:
        heroes: Dict[str, HeroDef] = {}
        for raw_id, payload in raw.items():
            context = f"hero '{raw_id}'"
            hero_data = self._require_mapping(payload, context)
            self._assert_required(hero_data, _REQUIRED_FIELDS, context)
            heroes[raw_id] = HeroDef(
                id=raw_id,
                name=self._require_str(hero_data["name"], f"{context} name"),
                role=self._require_str(hero_data["role"], f"{context} role"),
                base_health=self._require_positive_int(hero_data["base_health"], f"{context} base_health"),
                base_attack=self._require_positive_int(hero_data["base_attack"], f"{context} base_attack"),
                base_defense=self._require_positive_int(hero_data["base_defense"], f"{context} base_defense"),
                starting_skills=tuple(
                    self._require_str_list(hero_data.get("starting_skills", []), f"{context} starting_skills")
                ),
            )
        return heroes
