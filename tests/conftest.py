from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, TypeVar

import pytest

from idlehorde.data.repositories import HeroesRepository, SkillsRepository

T = TypeVar("T")


class ScriptedRNG:
    """RNG double that replays fixed draws, repeating the last one when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self._values: List[float] = list(values)
        if not self._values:
            raise ValueError("ScriptedRNG needs at least one value.")
        self.draws = 0

    def random(self) -> float:
        index = min(self.draws, len(self._values) - 1)
        self.draws += 1
        return self._values[index]

    def randint(self, a: int, b: int) -> int:
        return a + int(self.random() * (b - a + 1))

    def choice(self, seq: Sequence[T]) -> T:
        return seq[int(self.random() * len(seq))]


@pytest.fixture
def scripted_rng() -> Callable[..., ScriptedRNG]:
    def _make(*values: float) -> ScriptedRNG:
        return ScriptedRNG(values)

    return _make


@pytest.fixture
def heroes_repo() -> HeroesRepository:
    return HeroesRepository()


@pytest.fixture
def skills_repo() -> SkillsRepository:
    return SkillsRepository()
