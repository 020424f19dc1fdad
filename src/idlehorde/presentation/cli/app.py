"""Headless command-line driver for the horde simulation."""
from __future__ import annotations

import argparse
import logging
import secrets
from pathlib import Path
from typing import List, Sequence

from idlehorde.core.rng import RNG
from idlehorde.core.types import VALID_SPEED_MULTIPLIERS
from idlehorde.data.repositories import HeroesRepository, SkillsRepository
from idlehorde.presentation.cli import config, render
from idlehorde.presentation.cli.save_store import SaveStore
from idlehorde.services.game_session import GameSession
from idlehorde.services.save_service import SaveService

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="idlehorde", description="Idle horde-mode RPG simulation.")
    parser.add_argument("--save-dir", type=Path, default=None, help="Directory holding the save file.")
    parser.add_argument("--config", type=Path, default=None, help="Path to the user config file.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Simulate the horde battle for a while.")
    run.add_argument("--seconds", type=float, default=60.0, help="Simulated seconds to run.")
    run.add_argument("--tick-ms", type=float, default=100.0, help="Simulated frame length.")
    run.add_argument("--seed", type=int, default=None, help="Seed for deterministic runs.")
    run.add_argument("--speed", type=int, choices=VALID_SPEED_MULTIPLIERS, default=None)
    run.add_argument("--auto-skills", action="store_true", help="Cast every ready skill each frame.")
    run.add_argument("--auto-upgrade", action="store_true", help="Buy hero levels whenever affordable.")
    run.add_argument(
        "--advance-after",
        type=int,
        default=0,
        help="Advance the stage after this many defeats (0 keeps the current stage).",
    )

    subparsers.add_parser("status", help="Show the saved game.")
    subparsers.add_parser("reset", help="Delete the saved game.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    store = SaveStore(args.save_dir)
    if args.command == "reset":
        store.delete()
        print("Save deleted.")
        return 0
    if args.command == "status":
        return _show_status(store)
    return _run(args, store)


def _load_session(store: SaveStore, *, seed: int, speed: int, autosave_interval_ms: int) -> GameSession:
    heroes_repo = HeroesRepository()
    skills_repo = SkillsRepository()
    loaded = SaveService(heroes_repo=heroes_repo).deserialize(store.read())
    return GameSession.from_save(
        loaded,
        heroes_repo=heroes_repo,
        skills_repo=skills_repo,
        rng=RNG(seed),
        on_save=store.write,
        speed_multiplier=speed,
        autosave_interval_ms=autosave_interval_ms,
    )


def _run(args: argparse.Namespace, store: SaveStore) -> int:
    if args.tick_ms <= 0:
        print("--tick-ms must be positive.")
        return 2
    user_config = config.load_config(args.config)
    speed = args.speed or user_config["speed_multiplier"]
    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    session = _load_session(
        store,
        seed=seed,
        speed=speed,
        autosave_interval_ms=user_config["autosave_interval_ms"],
    )
    session.start()
    logger.info("Running %.1fs at %sx speed (seed %s)", args.seconds, speed, seed)

    elapsed = 0.0
    total_ms = args.seconds * 1000
    while elapsed < total_ms:
        step = min(args.tick_ms, total_ms - elapsed)
        session.update(step)
        elapsed += step
        if args.auto_skills:
            for skill_id in session.engine.ready_skills():
                session.engine.use_skill(skill_id)
        if args.auto_upgrade:
            while session.upgrade_hero().success:
                pass
        if args.advance_after and session.engine.waves.enemies_defeated >= args.advance_after:
            session.advance_stage()

    session.save()
    render.render_heading("Battle")
    render.render_lines(render.format_battle_view(session.engine.get_battle_view()))
    render.render_heading("Economy")
    economy_lines = [render.format_economy(session.ledger), f"Upgrade cost {session.hero.upgrade_cost}"]
    if session.offline_reward is not None:
        reward = session.offline_reward
        economy_lines.append(f"Earned {reward.gold} gold while away for {reward.formatted_duration}")
    render.render_lines(economy_lines)
    render.render_heading("Adventure Log")
    render.render_lines(render.format_log(session.adventure_log.entries()))
    return 0


def _show_status(store: SaveStore) -> int:
    loaded = SaveService(heroes_repo=HeroesRepository()).deserialize(store.read())
    if loaded is None:
        print("No saved game.")
        return 1
    lines: List[str] = [
        f"Stage {loaded.stage}",
        f"{loaded.hero.name} ({loaded.hero.role}) level {loaded.hero.level}",
        f"Skills: {', '.join(loaded.hero.unlocked_skills)}",
        render.format_economy(loaded.ledger),
    ]
    render.render_heading("Saved Game")
    render.render_lines(lines)
    return 0
