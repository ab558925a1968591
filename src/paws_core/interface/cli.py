"""
paws command-line interface.

Inspection and maintenance commands over kennel JSON files:

    paws status kennel.json [--at 2024-05-01T12:00]
    paws kennel 3
    paws compete kennel.json Rex agility local --seed 7
    paws tick kennel.json
    paws list
    paws seed 7 | --clear

A kennel argument that is not an existing path or ``.json`` file is read
as a kennel id inside the configured ``kennels_dir``.
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from ..config import DEFAULT_CONFIG, Config, load_config, set_seed
from ..state.catalog import CatalogError, load_ailment_catalog
from ..state.schema import apply_delta
from ..state.store import JsonKennelStore, Kennel, read_kennel_file, write_kennel_file
from ..systems import care, competition, energy, health, kennel, training_points
from ..systems.activities import ActivityOrchestrator
from ..tools.clock import FixedClock, SystemClock, ensure_utc
from ..tools.rng import make_rng
from . import renderer

logger = logging.getLogger(__name__)


def _kennel_path(ref: str, config: Config) -> Path:
    """A kennel file path as given, or a kennel id looked up in ``kennels_dir``."""
    path = Path(ref)
    if path.suffix == ".json" or path.exists():
        return path
    return Path(config.get("kennels_dir", DEFAULT_CONFIG["kennels_dir"])) / f"{ref}.json"


def _load_kennel(path: Path) -> Kennel | None:
    loaded = read_kennel_file(path)
    if loaded is None:
        renderer.show_error(f"Could not load kennel file: {path}")
    return loaded


def _load_catalog(config: Config):
    path = config.get("ailment_catalog")
    if not path:
        return None
    return load_ailment_catalog(path)


def _parse_time(value: str | None) -> datetime:
    if value is None:
        return SystemClock().now()
    return ensure_utc(datetime.fromisoformat(value))


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_status(args, config: Config) -> int:
    """Show each dog's condition without changing anything."""
    loaded = _load_kennel(_kennel_path(args.kennel, config))
    if loaded is None:
        return 1
    catalog = _load_catalog(config)
    now = _parse_time(args.at)

    renderer.show_owner(loaded.owner)
    for dog in loaded.dogs:
        preview = apply_delta(dog, care.apply_hunger_thirst_decay(dog, now))
        current = health.with_current_health(preview, now)
        renderer.show_dog_status(
            preview,
            health.health_status(preview, now),
            energy.energy_regen_info(current, loaded.owner.kennel_level),
            training_points.training_points_capacity(current),
            now,
            catalog,
        )
    return 0


def cmd_kennel(args, config: Config) -> int:
    """Show the kennel level table."""
    level = kennel.clamp_level(args.level)
    renderer.show_kennel_levels(
        list(kennel.KENNEL_LEVELS.values()),
        current=level,
        next_cost=kennel.upgrade_cost(level),
    )
    new = kennel.new_features_at_level(level)
    if new:
        renderer.console.print(f"Unlocked at level {level}: {', '.join(new)}")
    return 0


def cmd_compete(args, config: Config) -> int:
    """Dry-run a competition. Nothing is saved."""
    loaded = _load_kennel(_kennel_path(args.kennel, config))
    if loaded is None:
        return 1

    dog = loaded.get_dog(args.dog)
    if dog is None:
        renderer.show_error(f"No dog named {args.dog!r} in this kennel")
        return 1
    discipline = competition.get_competition_type(args.competition)
    if discipline is None:
        renderer.show_error(f"Unknown competition: {args.competition}")
        return 1
    tier = competition.get_tier(args.tier)
    if tier is None:
        renderer.show_error(f"Unknown tier: {args.tier}")
        return 1

    seed = args.seed if args.seed is not None else config.get("seed")
    result = competition.run_competition(
        dog, loaded.owner, discipline, tier, make_rng(seed),
        player_skill=args.skill,
        opponent_count=config.get("opponent_count", competition.DEFAULT_OPPONENTS),
    )
    renderer.show_competition(result)
    return 0 if result.success else 2


def cmd_tick(args, config: Config) -> int:
    """Advance every dog to now (or --at) and save the kennel."""
    path = _kennel_path(args.kennel, config)
    loaded = _load_kennel(path)
    if loaded is None:
        return 1
    catalog = _load_catalog(config)

    seed = args.seed if args.seed is not None else config.get("seed")
    clock = FixedClock(_parse_time(args.at))
    orchestrator = ActivityOrchestrator(
        clock,
        make_rng(seed),
        catalog=catalog,
        opponent_count=config.get("opponent_count", competition.DEFAULT_OPPONENTS),
    )

    dogs = []
    for dog in loaded.dogs:
        outcome = orchestrator.tick(dog, loaded.owner, check_illness=not args.no_illness)
        renderer.show_notices(dog.name, outcome.notices)
        dogs.append(outcome.dog)

    write_kennel_file(loaded.model_copy(update={"dogs": dogs}), path)
    logger.info(f"Ticked {len(dogs)} dogs in {path}")
    return 0


def cmd_list(args, config: Config) -> int:
    """List the kennels saved in the configured kennels directory."""
    store = JsonKennelStore(config.get("kennels_dir", DEFAULT_CONFIG["kennels_dir"]))
    kennels = []
    for kennel_id in store.list_ids():
        loaded = store.load(kennel_id)
        if loaded is not None:
            kennels.append(loaded)
    renderer.show_kennel_list(kennels, store.kennels_dir)
    return 0


def cmd_seed(args, config: Config) -> int:
    """Save (or clear) the default RNG seed."""
    if not args.clear and args.value is None:
        current = config.get("seed")
        renderer.console.print(f"Seed: {current if current is not None else 'random'}")
        return 0

    seed = None if args.clear else args.value
    if not set_seed(seed, args.config_dir):
        renderer.show_error(f"Could not save config in {args.config_dir}")
        return 1
    renderer.console.print(f"Seed {'cleared' if seed is None else f'set to {seed}'}")
    return 0


COMMANDS = {
    "status": cmd_status,
    "kennel": cmd_kennel,
    "compete": cmd_compete,
    "tick": cmd_tick,
    "list": cmd_list,
    "seed": cmd_seed,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="paws", description="paws-core kennel simulation tools")
    parser.add_argument(
        "--config-dir",
        default=".",
        help="Directory holding .paws_config.json",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at DEBUG level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    kennel_help = "Kennel JSON file, or a kennel id in kennels_dir"

    status = sub.add_parser("status", help="Show dog condition")
    status.add_argument("kennel", help=kennel_help)
    status.add_argument("--at", help="ISO timestamp to evaluate at (default: now)")

    levels = sub.add_parser("kennel", help="Show kennel level table")
    levels.add_argument("level", type=int)

    compete = sub.add_parser("compete", help="Dry-run a competition")
    compete.add_argument("kennel", help=kennel_help)
    compete.add_argument("dog", help="Dog id or name")
    compete.add_argument("competition", choices=sorted(competition.COMPETITION_TYPES))
    compete.add_argument("tier")
    compete.add_argument("--seed", type=int)
    compete.add_argument("--skill", type=float, default=0, help="Manual play skill (0-100)")

    tick = sub.add_parser("tick", help="Advance time for every dog and save")
    tick.add_argument("kennel", help=kennel_help)
    tick.add_argument("--at", help="ISO timestamp to advance to (default: now)")
    tick.add_argument("--seed", type=int)
    tick.add_argument("--no-illness", action="store_true", help="Skip the illness roll")

    sub.add_parser("list", help="List kennels in kennels_dir")

    seed = sub.add_parser("seed", help="Show or save the default RNG seed")
    seed.add_argument("value", type=int, nargs="?")
    seed.add_argument("--clear", action="store_true", help="Go back to unseeded runs")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(Path(args.config_dir))
    level = "DEBUG" if args.verbose else str(config.get("log_level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args, config)
    except CatalogError as e:
        renderer.show_error(str(e))
        return 1
