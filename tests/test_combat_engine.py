from __future__ import annotations

import pytest

from idlehorde.core.rng import RNG
from idlehorde.data.repositories import SkillsRepository
from idlehorde.domain.adventure_log import AdventureLog
from idlehorde.domain.entities import Hero
from idlehorde.services.combat_engine import (
    AttackResolvedEvent,
    BattleStartedEvent,
    CombatEngine,
    EnemyDefeatedEvent,
    HeroRespawnedEvent,
    WaveSpawnedEvent,
)


def _hero() -> Hero:
    return Hero.create(hero_id=0, name="Tester", role="Tank", base_health=500, base_attack=30, base_defense=25)


def _engine(rng, *, speed: int = 1, skills_repo: SkillsRepository | None = None, log: AdventureLog | None = None):
    skills = {skill.id: skill for skill in skills_repo.all()} if skills_repo else None
    return CombatEngine(rng, adventure_log=log, skills=skills, speed_provider=lambda: speed)


def _attacks(events) -> list[AttackResolvedEvent]:
    return [event for event in events if isinstance(event, AttackResolvedEvent)]


def test_start_battle_emits_event_and_spawns_horde() -> None:
    engine = _engine(RNG(1))
    events = engine.start_battle(_hero(), 1)
    assert events == [BattleStartedEvent(stage=1, enemy_count=3)]
    assert engine.is_active
    assert len(engine.waves.enemies) == 3


def test_no_round_before_interval() -> None:
    engine = _engine(RNG(1))
    engine.start_battle(_hero(), 1)
    assert engine.update(999) == []
    assert engine.time_since_last_attack == 999
    events = engine.update(1)
    assert len(_attacks(events)) == 4
    assert engine.time_since_last_attack == 0


def test_long_tick_fires_exactly_one_round() -> None:
    engine = _engine(RNG(2024))
    engine.start_battle(_hero(), 1)
    living = len(engine.waves.living_enemies())

    events = engine.update(2500)

    attacks = _attacks(events)
    assert len(attacks) == 1 + living
    assert attacks[0].attacker_name == "Tester"
    assert all(event.target_name == "Tester" for event in attacks[1:])
    assert engine.time_since_last_attack == 0


def test_speed_multiplier_shortens_interval() -> None:
    engine = _engine(RNG(3), speed=4)
    engine.start_battle(_hero(), 1)
    assert engine.effective_interval_ms == 250
    assert engine.update(249) == []
    assert len(_attacks(engine.update(1))) == 4


def test_scripted_round_damage(scripted_rng) -> None:
    engine = _engine(scripted_rng(0.75))
    hero = _hero()
    engine.start_battle(hero, 1)

    engine.update(999)
    events = engine.update(1)

    attacks = _attacks(events)
    assert attacks[0].target_id == 2
    assert attacks[0].damage == 26
    assert engine.waves.enemies[2].stats.health == 174
    assert [event.damage for event in attacks[1:]] == [13, 13, 13]
    assert hero.stats.health == 461
    assert [entry.amount for entry in engine.effects.entries] == [26, 13, 13, 13]
    assert all(not entry.is_heal for entry in engine.effects.entries)


def test_effects_use_combatant_positions(scripted_rng) -> None:
    engine = _engine(scripted_rng(0.0))
    hero = _hero()
    engine.start_battle(hero, 1)
    hero.x, hero.y = 100.0, 300.0
    engine.waves.enemies[0].x = 400.0
    engine.waves.enemies[0].y = 200.0

    engine.update(999)
    engine.update(1)

    first, *rest = engine.effects.entries
    assert first.x == 400.0
    assert first.y == pytest.approx(179.97)
    assert all(entry.x == 100.0 for entry in rest)


def test_same_seed_replays_identically() -> None:
    def run(seed: int) -> list:
        engine = _engine(RNG(seed))
        engine.start_battle(_hero(), 4)
        events = []
        for _ in range(120):
            events.extend(engine.update(250))
        return events

    assert run(99) == run(99)


def test_defeated_enemy_is_replaced_and_counted(scripted_rng) -> None:
    log = AdventureLog(clock=lambda: "00:00:00")
    engine = _engine(scripted_rng(0.0), log=log)
    engine.start_battle(_hero(), 1)
    engine.waves.enemies[0].stats.health = 1

    events = engine.update(1000)

    attacks = _attacks(events)
    assert len(attacks) == 3
    assert EnemyDefeatedEvent(enemy_id=0, enemy_kind="Goblin") in events
    assert WaveSpawnedEvent(stage=1, wave=2) in events
    assert engine.waves.enemies_defeated == 1
    assert len(engine.waves.living_enemies()) == 3
    messages = [entry.message for entry in log.entries()]
    assert "Defeated Goblin" in messages
    assert "Wave 2 incoming!" in messages


def test_hero_respawns_and_later_enemies_hold_their_turn(scripted_rng) -> None:
    engine = _engine(scripted_rng(0.5))
    hero = _hero()
    engine.start_battle(hero, 1)
    hero.stats.health = 1

    events = engine.update(1000)

    attacks = _attacks(events)
    assert len(attacks) == 2
    assert isinstance(events[-1], HeroRespawnedEvent)
    assert hero.stats.health == hero.stats.max_health


def test_pause_short_circuits_update() -> None:
    engine = _engine(RNG(5))
    engine.start_battle(_hero(), 1)
    assert engine.toggle_pause() is True
    assert engine.update(5000) == []
    assert engine.time_since_last_attack == 0
    assert engine.toggle_pause() is False
    assert len(_attacks(engine.update(1000))) == 4


def test_stopped_or_unstarted_engine_does_nothing() -> None:
    engine = _engine(RNG(5))
    assert engine.update(1000) == []
    engine.start_battle(_hero(), 1)
    engine.stop_battle()
    assert engine.update(1000) == []


def test_battle_view_reflects_state() -> None:
    engine = _engine(RNG(8))
    engine.start_battle(_hero(), 6)
    view = engine.get_battle_view()
    assert view.stage == 6
    assert view.wave == 1
    assert view.hero is not None and view.hero.health_percent == 1.0
    assert [enemy.name for enemy in view.enemies] == ["Skeleton"] * 4
    assert view.is_active and not view.is_paused


def test_use_skill_fireball_then_cooldown(scripted_rng, skills_repo) -> None:
    engine = _engine(scripted_rng(0.75), skills_repo=skills_repo)
    engine.start_battle(_hero(), 1)

    result = engine.use_skill("fireball")

    assert result.used
    assert result.outcome is not None
    assert result.outcome.total_amount == 58
    assert engine.waves.enemies[0].stats.health == 142
    assert len(engine.effects) == 1
    assert engine.use_skill("fireball").reason == "cooldown"

    engine.update(5000)
    assert "fireball" in engine.ready_skills()


def test_use_skill_rejections(skills_repo) -> None:
    engine = _engine(RNG(1), skills_repo=skills_repo)
    assert engine.use_skill("fireball").reason == "unknown"
    engine.start_battle(_hero(), 1)
    assert engine.use_skill("meteor").reason == "unknown"
    engine.toggle_pause()
    assert engine.use_skill("fireball").reason == "inactive"


def test_unlock_skill_adds_to_book(scripted_rng, skills_repo) -> None:
    log = AdventureLog(clock=lambda: "00:00:00")
    engine = _engine(scripted_rng(0.75), skills_repo=skills_repo, log=log)
    hero = _hero()
    engine.start_battle(hero, 1)

    assert engine.unlock_skill("cleave") is True
    assert engine.unlock_skill("cleave") is False
    assert hero.has_skill("cleave")

    result = engine.use_skill("cleave")
    assert result.used
    assert [hit.amount for hit in result.outcome.hits] == [20, 20, 20]
    assert log.entries()[-1].message == "Tester cast Cleave for 60 damage!"


def test_skill_cooldowns_survive_stage_restart(skills_repo) -> None:
    engine = _engine(RNG(4), skills_repo=skills_repo)
    hero = _hero()
    engine.start_battle(hero, 1)
    engine.use_skill("fireball")
    engine.start_battle(hero, 2)
    assert engine.use_skill("fireball").reason == "cooldown"


def test_mixed_case_skill_ids_resolve(skills_repo) -> None:
    engine = _engine(RNG(6), skills_repo=skills_repo)
    hero = Hero.create(
        hero_id=0,
        name="Tester",
        role="Tank",
        base_health=500,
        base_attack=30,
        base_defense=25,
        unlocked_skills=["Fireball"],
    )
    engine.start_battle(hero, 1)

    assert engine.ready_skills() == ["fireball"]
    assert engine.use_skill("Fireball").used
    assert engine.use_skill("fireball").reason == "cooldown"
