"""Skills repository."""
from __future__ import annotations

from typing import Dict

from idlehorde.data.errors import DataValidationError
from idlehorde.data.repositories.base import RepositoryBase
from idlehorde.domain.defs import SkillDef
from idlehorde.domain.skills import SkillEffectKind

_REQUIRED_FIELDS = {"name", "description", "cooldown_ms", "effect_kind", "power"}


class SkillsRepository(RepositoryBase[SkillDef]):
    """Loads hero skills and their cooldowns."""

    def __init__(self, base_path=None) -> None:
        super().__init__("skills.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillDef]:
        skills: Dict[str, SkillDef] = {}
        for raw_id, payload in raw.items():
            context = f"skill '{raw_id}'"
            skill_data = self._require_mapping(payload, context)
            self._assert_required(skill_data, _REQUIRED_FIELDS, context)
            skills[raw_id] = SkillDef(
                id=raw_id,
                name=self._require_str(skill_data["name"], f"{context} name"),
                description=self._require_str(skill_data["description"], f"{context} description"),
                cooldown_ms=self._require_positive_int(skill_data["cooldown_ms"], f"{context} cooldown_ms"),
                effect_kind=self._require_effect_kind(skill_data["effect_kind"], f"{context} effect_kind"),
                power=self._require_number(skill_data["power"], f"{context} power"),
            )
        return skills

    @staticmethod
    def _require_effect_kind(value: object, context: str) -> SkillEffectKind:
        try:
            return SkillEffectKind(value)
        except ValueError as exc:
            allowed = sorted(kind.value for kind in SkillEffectKind)
            raise DataValidationError(f"{context} must be one of {allowed}.") from exc
