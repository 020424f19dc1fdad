"""Factory for creating the starting hero from definitions."""
from __future__ import annotations

from idlehorde.data.repositories import HeroesRepository
from idlehorde.domain.entities import Hero
from idlehorde.services.errors import FactoryError

DEFAULT_HERO_ID = "bartimaeus"


def create_starting_hero(heroes_repo: HeroesRepository, hero_id: str = DEFAULT_HERO_ID) -> Hero:
    """Instantiate a level 1 hero from the requested template."""
    try:
        hero_def = heroes_repo.get(hero_id)
    except KeyError as exc:
        raise FactoryError(f"Hero '{hero_id}' not found.") from exc

    return Hero.create(
        hero_id=0,
        name=hero_def.name,
        role=hero_def.role,
        base_health=hero_def.base_health,
        base_attack=hero_def.base_attack,
        base_defense=hero_def.base_defense,
        unlocked_skills=hero_def.starting_skills or None,
    )
