import argparse
import logging
import sys
from pathlib import Path

from .config import GameConfig
from .core.rng import RandomSource
from .errors import ConfigError
from .logging_config import configure_logging
from .session import GameSession

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="sigdungeon",
        description="Generate a dungeon from an item's magical signature and resolve a run through it.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run.")
    parser.add_argument(
        "--mode",
        choices=("explore", "simulate"),
        default="explore",
        help="explore walks the grid; simulate fights the enemy list in order.",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to a YAML file overriding the default tuning constants.",
    )
    parser.add_argument("--map", action="store_true", help="Print the generated dungeon map.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else None)

    try:
        config = GameConfig.load(args.config_path)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    session = GameSession(config=config, rng=RandomSource(args.seed))
    for item in list(session.inventory):
        session.equip(item)

    seed_item = session.item_generator.generate_random(session.rng)
    session.inventory.add(seed_item)
    session.assign_to_slot(seed_item, 0)
    dungeon = session.start_dungeon(0)

    print(f"{dungeon.name} (difficulty {dungeon.difficulty}) seeded by {seed_item.name} {seed_item.signature}")
    if args.map:
        print("\n".join(dungeon.to_str_lines(show_player=False)))

    outcome = session.simulate_dungeon() if args.mode == "simulate" else session.complete_dungeon()
    result = outcome.result
    for line in result.combat_log:
        print(line)

    stats = result.stats
    print(
        f"Result: {'SUCCESS' if result.success else 'FAILURE'} | duration {result.duration} | "
        f"defeated {stats.enemies_defeated} | dealt {stats.total_damage_dealt} | taken {stats.total_damage_taken} | "
        f"HP {result.player_stats.remaining_health}/{result.player_stats.max_health}"
    )
    for item in result.loot:
        print(f"  + {item.name} ({item.type.value}, power {item.power})")
    return 0 if result.success else 1
