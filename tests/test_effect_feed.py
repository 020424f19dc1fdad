from __future__ import annotations

import pytest

from idlehorde.domain.effects import EffectFeed


def test_spawn_places_entry_above_origin() -> None:
    feed = EffectFeed()
    entry = feed.spawn(10.0, 100.0, 7.9, False)
    assert entry.x == 10.0
    assert entry.y == 80.0
    assert entry.amount == 7
    assert entry.age_ms == 0.0
    assert entry.ttl_ms == 1000.0
    assert entry.opacity == 1.0
    assert not entry.is_heal
    assert len(feed) == 1


def test_amount_is_never_negative() -> None:
    feed = EffectFeed()
    entry = feed.spawn(0.0, 0.0, -5, True)
    assert entry.amount == 0
    assert entry.is_heal


def test_update_drifts_and_fades() -> None:
    feed = EffectFeed()
    feed.spawn(0.0, 100.0, 12, False)
    feed.update(500)
    (entry,) = feed.entries
    assert entry.age_ms == 500
    assert entry.y == pytest.approx(65.0)
    assert entry.opacity == pytest.approx(0.5)


def test_entry_expires_at_ttl() -> None:
    feed = EffectFeed()
    feed.spawn(0.0, 0.0, 3, False)
    feed.update(999)
    assert len(feed) == 1
    feed.update(1)
    assert len(feed) == 0


@pytest.mark.parametrize("steps", [[1000.0], [5000.0], [16.0] * 63, [250.0, 250.0, 250.0, 250.5], [999.9, 0.2]])
def test_entry_gone_after_ttl_for_any_step_size(steps: list[float]) -> None:
    feed = EffectFeed()
    feed.spawn(0.0, 0.0, 3, False)
    for step in steps:
        feed.update(step)
    assert feed.entries == ()


def test_newer_entries_outlive_older_ones() -> None:
    feed = EffectFeed()
    feed.spawn(0.0, 0.0, 1, False)
    feed.update(600)
    feed.spawn(0.0, 0.0, 2, True)
    feed.update(600)
    assert [entry.amount for entry in feed.entries] == [2]


def test_clear_removes_everything() -> None:
    feed = EffectFeed()
    for amount in range(4):
        feed.spawn(0.0, 0.0, amount, False)
    feed.clear()
    assert len(feed) == 0
