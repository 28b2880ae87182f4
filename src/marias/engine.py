"""
Move applier: validates one move and returns the next GameState.

Phases run Bidding -> Talon -> Playing -> Finished and never go back. Every check
happens before the new state is built, so a rejected move leaves nothing changed.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from .bidding import Contract, is_no_trump, needs_trump_seven
from .deal import HAND_SIZE, TALON_SIZE, next_seat
from .deck import Card, Rank, Suit
from .errors import (
    IllegalMoveError,
    InvalidPhaseError,
    InvalidStateError,
    InvalidTalonError,
)
from .moves import ChooseContract, ChooseTrump, DiscardTalon, Move, PlayCard, RaiseFlek
from .play import legal_plays, resolve_trick
from .rules import DEFAULT_RULESET, FLEK_NAMES, MAX_FLEK_LEVEL, Ruleset
from .state import Announcement, GameState, Phase, Seat, Trick

log = logging.getLogger(__name__)


def legal_moves(state: GameState, seat: int) -> list[Card]:
    """Cards seat may play onto the open trick, in hand order."""
    hand = state.hand(seat)
    if not hand:
        raise InvalidStateError(f"Seat {seat} has no cards; the hand should already be finished")
    return legal_plays(hand, state.current_trick.plays, state.effective_trump, state.rank_order)


def _check_seat(move: Move, expected: int) -> None:
    if move.seat is not None and move.seat != expected:
        raise IllegalMoveError(f"Seat {move.seat} cannot act now; waiting for seat {expected}")


def _require_phase(state: GameState, move: Move, *phases: Phase) -> None:
    if state.phase not in phases:
        allowed = "/".join(p.value for p in phases)
        raise InvalidPhaseError(
            f"{type(move).__name__} is only accepted in {allowed}, not {state.phase.value}"
        )


# ---- Bidding ----


def _apply_choose_trump(state: GameState, move: ChooseTrump) -> GameState:
    _require_phase(state, move, Phase.BIDDING)
    _check_seat(move, state.actor)
    if state.trump is not None:
        raise IllegalMoveError(f"Trump is already {state.trump.value}")
    try:
        suit = Suit(move.suit)
    except ValueError:
        raise IllegalMoveError(f"Unknown suit {move.suit!r}") from None
    return replace(state, trump=suit)


def _apply_choose_contract(state: GameState, move: ChooseContract) -> GameState:
    _require_phase(state, move, Phase.BIDDING)
    _check_seat(move, state.actor)
    if state.trump is None:
        raise IllegalMoveError("Choose trump before the contract")
    try:
        contract = Contract(move.contract)
    except ValueError:
        raise IllegalMoveError(f"Unknown contract {move.contract!r}") from None
    # A dealt forhont holds 12 cards and must discard; a 10-card hand skips the talon step.
    phase = Phase.TALON if len(state.hand(state.actor)) > HAND_SIZE else Phase.PLAYING
    if phase == Phase.PLAYING:
        log.info("Contract %s (trump %s): play starts", contract.value, state.trump.value)
    return replace(
        state,
        contract=contract,
        announced=bool(move.announced),
        phase=phase,
        current_trick=Trick(lead_seat=state.actor),
        current_seat=state.actor,
    )


# ---- Talon ----


def _validate_talon(state: GameState, cards: tuple[Card, ...]) -> None:
    if len(cards) != TALON_SIZE:
        raise InvalidTalonError(f"Must discard exactly {TALON_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise InvalidTalonError("Cannot discard the same card twice")
    seat = state.seats[state.actor]
    for c in cards:
        if not seat.holds(c):
            raise InvalidTalonError(f"Card {c} is not in the actor's hand")
    if not is_no_trump(state.contract):
        for c in cards:
            if c.rank in (Rank.ACE, Rank.TEN):
                raise InvalidTalonError(f"Aces and Tens cannot go to the talon ({c})")
    if needs_trump_seven(state.contract):
        for c in cards:
            if c.suit == state.trump and c.rank == Rank.SEVEN:
                raise InvalidTalonError("The trump seven cannot be discarded in a Sedma contract")


def _apply_discard_talon(state: GameState, move: DiscardTalon) -> GameState:
    _require_phase(state, move, Phase.TALON)
    _check_seat(move, state.actor)
    cards = tuple(move.cards)
    _validate_talon(state, cards)
    actor = state.seats[state.actor].without(*cards)
    log.info("Talon discarded; contract %s starts", state.contract.value)
    return replace(
        state.with_seat(state.actor, actor),
        talon=state.talon + cards,
        phase=Phase.PLAYING,
    )


# ---- Flek ----


def flek_raiser_is_defense(level: int) -> bool:
    """Level 1 (Flek), 3 (Tutti) and 5 (Kalhoty) are raised by the defense."""
    return level % 2 == 1


def _apply_raise_flek(state: GameState, move: RaiseFlek) -> GameState:
    _require_phase(state, move, Phase.TALON, Phase.PLAYING)
    if state.history or not state.current_trick.is_empty():
        raise IllegalMoveError("Flek must be given before the first card is played")
    level = state.flek_level + 1
    if level > MAX_FLEK_LEVEL:
        raise IllegalMoveError(f"Cannot go beyond {FLEK_NAMES[-1]}")
    if move.seat is not None:
        is_defender = move.seat != state.actor
        if is_defender != flek_raiser_is_defense(level):
            side = "defense" if flek_raiser_is_defense(level) else "actor"
            raise IllegalMoveError(f"{FLEK_NAMES[level - 1]} must come from the {side}")
    log.debug("%s (flek level %d)", FLEK_NAMES[level - 1], level)
    return replace(state, flek_level=level)


# ---- Playing ----


def _announcement_for_lead(state: GameState, seat: Seat, card: Card, rules: Ruleset) -> Announcement | None:
    """Leading K or Q while holding its partner declares the pair once per suit."""
    if card.rank not in (Rank.KING, Rank.QUEEN):
        return None
    partner = Rank.QUEEN if card.rank == Rank.KING else Rank.KING
    if not seat.holds(Card(card.suit, partner)) or seat.announced(card.suit):
        return None
    value = rules.trump_meld_points if card.suit == state.effective_trump else rules.meld_points
    return Announcement(suit=card.suit, value=value)


def _finish_trick(state: GameState, trick: Trick) -> GameState:
    winner = resolve_trick(trick, state.trump, state.is_no_trump)
    won = state.seats[winner]
    state = state.with_seat(winner, replace(won, collected=won.collected + tuple(trick.cards())))
    log.debug("Trick %d: %s won by seat %d", len(state.history) + 1, trick.cards(), winner)
    state = replace(
        state,
        history=state.history + (trick,),
        current_trick=Trick(lead_seat=winner),
        current_seat=winner,
    )
    if all(not s.hand for s in state.seats):
        log.info("Hand finished after %d tricks", len(state.history))
        state = replace(state, phase=Phase.FINISHED)
    return state


def _apply_play_card(state: GameState, move: PlayCard, rules: Ruleset) -> GameState:
    _require_phase(state, move, Phase.PLAYING)
    seat_idx = state.current_seat
    _check_seat(move, seat_idx)
    card = move.card
    legal = legal_moves(state, seat_idx)
    if card not in legal:
        raise IllegalMoveError(f"Illegal play {card}; legal {legal}")

    seat = state.seats[seat_idx]
    if state.current_trick.is_empty():
        announcement = _announcement_for_lead(state, seat, card, rules)
        if announcement is not None:
            log.debug("Seat %d announces %s for %d", seat_idx, card.suit.value, announcement.value)
            seat = replace(seat, announcements=seat.announcements + (announcement,))

    state = state.with_seat(seat_idx, seat.without(card))
    trick = state.current_trick.with_play(seat_idx, card)
    log.debug("Seat %d plays %s", seat_idx, card)
    if trick.is_complete():
        return _finish_trick(state, trick)
    return replace(state, current_trick=trick, current_seat=next_seat(seat_idx))


def apply_move(state: GameState, move: Move, rules: Ruleset = DEFAULT_RULESET) -> GameState:
    """
    Validate move against state and return the resulting state.
    Raises a MariasError subclass on any invalid input; state itself is never modified.
    """
    if state.phase == Phase.FINISHED:
        raise InvalidPhaseError("The hand is finished; start a new game")
    if isinstance(move, ChooseTrump):
        return _apply_choose_trump(state, move)
    if isinstance(move, ChooseContract):
        return _apply_choose_contract(state, move)
    if isinstance(move, DiscardTalon):
        return _apply_discard_talon(state, move)
    if isinstance(move, RaiseFlek):
        return _apply_raise_flek(state, move)
    if isinstance(move, PlayCard):
        return _apply_play_card(state, move, rules)
    raise IllegalMoveError(f"Unknown move {move!r}")


def replay(state: GameState, moves: list[Move], rules: Ruleset = DEFAULT_RULESET) -> GameState:
    """Apply moves in order, starting from state."""
    for move in moves:
        state = apply_move(state, move, rules)
    return state
