"""
Single deal and match orchestration: deal → trump/contract → talon → play → score.
Callers supply callbacks; the engine validates everything they return.
"""
from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from .bot import bot_action
from .deal import NUM_SEATS, next_forhont
from .deck import Card
from .engine import apply_move
from .moves import Move, PlayCard
from .rules import DEFAULT_RULESET, Ruleset
from .scoring import ScoreResult, calculate_final_score, evaluate_contract, settle
from .state import GameState, Phase, new_game

log = logging.getLogger(__name__)

BidFn = Callable[[GameState, int], Move]
PlayFn = Callable[[GameState, int], Card]


class DealResult(NamedTuple):
    state: GameState
    score: ScoreResult
    made: bool
    payoffs: tuple[int, int, int]


def play_out(state: GameState, get_play: PlayFn, rules: Ruleset = DEFAULT_RULESET) -> GameState:
    """Play every remaining card of a state already in the Playing phase."""
    while state.phase == Phase.PLAYING:
        seat = state.current_seat
        card = get_play(state, seat)
        state = apply_move(state, PlayCard(card, seat=seat), rules)
    return state


def run_deal(
    seed: int,
    get_play: PlayFn,
    forhont: int = 0,
    get_bid: BidFn | None = None,
    rules: Ruleset = DEFAULT_RULESET,
) -> DealResult:
    """
    Deal with seed and play one full hand.
    get_bid(state, actor) returns the actor's Bidding/Talon moves (defaults to the bot);
    get_play(state, seat) returns the card seat plays.
    """
    get_bid = get_bid or bot_action
    state = new_game(seed, forhont=forhont)
    while state.phase in (Phase.BIDDING, Phase.TALON):
        state = apply_move(state, get_bid(state, state.actor), rules)
    state = play_out(state, get_play, rules)

    score = calculate_final_score(state, rules)
    made = evaluate_contract(state, rules)
    payoffs = settle(state, rules)
    log.info(
        "Deal seed=%d contract=%s actor=%d made=%s payoffs=%s",
        seed, state.contract.value, state.actor, made, payoffs,
    )
    return DealResult(state=state, score=score, made=made, payoffs=payoffs)


def run_match(
    num_deals: int,
    get_play: PlayFn,
    seed: int = 0,
    get_bid: BidFn | None = None,
    rules: Ruleset = DEFAULT_RULESET,
) -> tuple[tuple[int, int, int], list[tuple[int, int, int]]]:
    """
    Run a match of num_deals. Forhont rotates 0->1->2->0; deal i uses seed + i.
    Returns (total_s0, total_s1, total_s2), list of per-deal payoffs.
    """
    totals = [0] * NUM_SEATS
    per_deal: list[tuple[int, int, int]] = []
    forhont = 0
    for i in range(num_deals):
        result = run_deal(seed + i, get_play, forhont=forhont, get_bid=get_bid, rules=rules)
        per_deal.append(result.payoffs)
        for s in range(NUM_SEATS):
            totals[s] += result.payoffs[s]
        forhont = next_forhont(forhont)
    return (totals[0], totals[1], totals[2]), per_deal
