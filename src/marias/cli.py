"""
Command-line interface for simulating Mariáš deals with the heuristic bot.

Usage examples (after installing the package):

    python -m marias.cli simulate --seed 7
    python -m marias.cli match --deals 20 --seed 0 --rules my_rules.json
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from .bot import get_bot_move
from .bidding import CONTRACT_NAMES
from .deal import NUM_SEATS
from .game import run_deal, run_match
from .play import resolve_trick
from .rules import DEFAULT_RULESET, FLEK_NAMES, Ruleset, load_ruleset

log = logging.getLogger(__name__)


def _ruleset_from_args(args: argparse.Namespace) -> Ruleset:
    if getattr(args, "rules", None):
        log.info("Loading ruleset from %s", args.rules)
        return load_ruleset(args.rules)
    return DEFAULT_RULESET


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the deal (a match uses seed, seed+1, ...).",
    )
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="Optional JSON file overriding scoring rules.",
    )


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play one deal with three bots and print every trick.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--forhont",
        type=int,
        default=0,
        choices=range(NUM_SEATS),
        help="Seat that deals first and declares.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    rules = _ruleset_from_args(args)
    result = run_deal(args.seed, get_bot_move, forhont=args.forhont, rules=rules)
    state = result.state

    print(
        f"Seed {state.seed}: seat {state.actor} plays {state.contract.value}, "
        f"trump {state.trump.value}; talon {list(state.talon)}"
    )
    print(f"  {CONTRACT_NAMES[state.contract]}")
    for i, trick in enumerate(state.history, start=1):
        winner = resolve_trick(trick, state.trump, state.is_no_trump)
        plays = ", ".join(f"{s}:{c}" for s, c in trick.plays)
        print(f"[trick {i:2d}] {plays} -> seat {winner}")
    for seat_idx, seat in enumerate(state.seats):
        for a in seat.announcements:
            print(f"Seat {seat_idx} announced {a.suit.value} for {a.value}")

    score = result.score
    print(
        f"Actor {score.actor_points}+{score.actor_announcements}, "
        f"defense {score.defense_points}+{score.defense_announcements}; "
        f"{'made' if result.made else 'failed'}"
    )
    print(f"Payoffs: {result.payoffs}")


def _add_match_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "match",
        help="Play several deals with rotating forhont and print running totals.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--deals",
        type=int,
        default=10,
        help="Number of deals in the match.",
    )
    parser.set_defaults(func=_cmd_match)


def _cmd_match(args: argparse.Namespace) -> None:
    rules = _ruleset_from_args(args)
    totals, per_deal = run_match(args.deals, get_bot_move, seed=args.seed, rules=rules)
    for i, payoffs in enumerate(per_deal, start=1):
        print(f"[deal {i}/{args.deals}] {payoffs}", flush=True)
    print(f"Totals: {totals}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marias",
        description=f"Mariáš engine tools (flek ladder: {', '.join(FLEK_NAMES)}).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level, e.g. DEBUG or INFO.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_match_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
