"""
Dark Horse CLI - Command-line interface for the engine.

Usage:
    darkhorse deal NAME...    Deal a new game and show the hands

Environment:
    DARKHORSE_LOG_LEVEL   Log level (default WARNING)
    DARKHORSE_SEED        Seed for the shuffles (default: random)
"""

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Environment configuration
DARKHORSE_LOG_LEVEL = os.getenv("DARKHORSE_LOG_LEVEL", "WARNING")
DARKHORSE_SEED = os.getenv("DARKHORSE_SEED") or None

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _log_level(value: str) -> str:
    level = value.upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid log level {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return level


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    # String defaults pass through type=, so bad environment values
    # are reported as usage errors too
    parser = argparse.ArgumentParser(
        description="Dark Horse - card-driven horse race engine",
        prog="darkhorse",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=DARKHORSE_LOG_LEVEL,
        help=f"Log level ({', '.join(LOG_LEVELS)})",
    )
    parser.add_argument("--seed", type=int, default=DARKHORSE_SEED, help="Random seed")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    deal_parser = subparsers.add_parser("deal", help="Deal a new game and show the hands")
    deal_parser.add_argument("names", nargs="+", help="Player names (2-6)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    from .engine_core.errors import EngineError

    try:
        if args.command == "deal":
            return cmd_deal(args)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def cmd_deal(args) -> int:
    """Deal a new game."""
    from .engine_core.randomness import make_rng
    from .games.dark_horse.setup import initialize_game

    state = initialize_game(args.names, rng=make_rng(args.seed))

    print(f"Dark horse tokens: {state.available_tokens}")
    for player in state.players:
        bets = ", ".join(str(c.horse_number) for c in player.betting_cards)
        print(f"\n{player.name} ({player.player_id})")
        print(f"  Bets on: {bets}")
        for card in player.action_cards:
            print(f"  - {card.describe()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
