"""Tests for the heuristic bot: each rule on its own and full games."""
from dataclasses import replace

import pytest

from marias.bidding import Contract
from marias.bot import (
    BotView,
    bot_action,
    choose_talon_discard,
    choose_trump,
    discard_low,
    discard_low_trump,
    get_bot_move,
    grease_for_partner,
    lead_boss_card,
    lead_highest,
    lead_probe,
    win_cheaply,
)
from marias.deck import Card, Suit, make_deck_32
from marias.engine import apply_move, legal_moves
from marias.moves import ChooseContract, ChooseTrump, DiscardTalon, PlayCard
from marias.state import GameState, Phase, Seat, Trick, create_initial_state, new_game

H, L, A, B = Suit.HEARTS, Suit.LEAVES, Suit.ACORNS, Suit.BELLS


def c(suit: Suit, rank: str) -> Card:
    return Card(suit, rank)


def _state(hands, plays=(), lead: int = 0, actor: int = 0, trump=B, history=()) -> GameState:
    state = create_initial_state(0, forhont=actor)
    seats = tuple(Seat(hand=tuple(h)) for h in hands)
    current = lead
    for seat, _ in plays:
        current = (seat + 1) % 3
    return replace(
        state,
        seats=seats,
        trump=trump,
        contract=Contract.HRA,
        phase=Phase.PLAYING,
        current_trick=Trick(lead, tuple(plays)),
        current_seat=current,
        history=tuple(history),
    )


def _view(state: GameState, seat: int) -> BotView:
    return BotView(state=state, seat=seat, legal=tuple(legal_moves(state, seat)))


def test_lead_boss_card():
    state = _state([[c(H, "A"), c(L, "7"), c(A, "8")], [], []])
    assert lead_boss_card(_view(state, 0)) == c(H, "A")
    assert get_bot_move(state, 0) == c(H, "A")


def test_boss_card_uses_played_cards():
    hands = [[c(H, "10"), c(L, "7")], [], []]
    assert get_bot_move(_state(hands), 0) == c(L, "7")
    seen = Trick(1, ((1, c(H, "A")), (2, c(H, "7")), (0, c(H, "8"))))
    assert get_bot_move(_state(hands, history=[seen]), 0) == c(H, "10")


def test_lead_probe_avoids_points_and_trump():
    state = _state([[c(H, "K"), c(L, "7"), c(B, "7")], [], []])
    view = _view(state, 0)
    assert lead_boss_card(view) is None
    assert lead_probe(view) == c(L, "7")


def test_lead_highest_as_last_resort():
    state = _state([[c(H, "10"), c(B, "8")], [], []])
    view = _view(state, 0)
    assert lead_boss_card(view) is None
    assert lead_probe(view) is None
    assert lead_highest(view) == c(H, "10")


def test_grease_for_partner():
    hands = [[], [], [c(H, "10"), c(H, "8")]]
    state = _state(hands, plays=[(0, c(H, "7")), (1, c(H, "A"))])
    view = _view(state, 2)
    assert view.partner == 1 and view.acts_last
    assert grease_for_partner(view) == c(H, "10")
    assert get_bot_move(state, 2) == c(H, "10")


def test_win_cheaply_against_actor():
    hands = [[], [c(H, "J"), c(H, "A"), c(L, "7")], []]
    state = _state(hands, plays=[(0, c(H, "9"))])
    view = _view(state, 1)
    assert grease_for_partner(view) is None
    assert win_cheaply(view) == c(H, "J")
    assert get_bot_move(state, 1) == c(H, "J")


def test_discard_low_side_card():
    hands = [[], [c(H, "9"), c(A, "7")], []]
    state = _state(hands, plays=[(0, c(L, "A"))])
    view = _view(state, 1)
    assert win_cheaply(view) is None
    assert discard_low(view) == c(A, "7")
    assert get_bot_move(state, 1) == c(A, "7")


def test_discard_low_trump_when_only_trumps_remain():
    hands = [[], [], [c(B, "9"), c(B, "7")]]
    state = _state(hands, plays=[(0, c(L, "A")), (1, c(B, "A"))], actor=1)
    view = _view(state, 2)
    assert grease_for_partner(view) is None
    assert win_cheaply(view) is None
    assert discard_low(view) is None
    assert discard_low_trump(view) == c(B, "7")
    assert get_bot_move(state, 2) == c(B, "7")


def test_choose_trump_picks_longest_suit():
    hand = [c(B, "7"), c(B, "8"), c(B, "9"), c(B, "K"), c(H, "A"), c(H, "10"), c(L, "A")]
    assert choose_trump(hand) == B


def _talon_state(contract: Contract) -> GameState:
    deck = make_deck_32()
    state = create_initial_state(0)
    hands = (deck[:12], deck[12:22], deck[22:])
    state = replace(state, seats=tuple(Seat(hand=tuple(h)) for h in hands))
    state = apply_move(state, ChooseTrump(H))
    return apply_move(state, ChooseContract(contract))


@pytest.mark.parametrize("contract", [Contract.HRA, Contract.SEDMA])
def test_talon_discard_prefers_low_side_cards(contract):
    state = _talon_state(contract)
    discard = choose_talon_discard(state)
    assert discard == (c(L, "7"), c(L, "8"))
    assert apply_move(state, DiscardTalon(discard)).phase == Phase.PLAYING


def test_bot_action_per_phase():
    state = new_game(9)
    move = bot_action(state, 0)
    assert isinstance(move, ChooseTrump)
    state = apply_move(state, move)
    move = bot_action(state, 0)
    assert move == ChooseContract(Contract.HRA, seat=0)
    state = apply_move(state, move)
    assert isinstance(bot_action(state, 0), DiscardTalon)


def test_no_bot_action_when_finished():
    state = replace(new_game(9), phase=Phase.FINISHED)
    with pytest.raises(ValueError):
        bot_action(state, 0)


@pytest.mark.parametrize("seed", range(10))
def test_bot_plays_only_legal_cards(seed):
    state = new_game(seed, forhont=seed % 3)
    while state.phase in (Phase.BIDDING, Phase.TALON):
        state = apply_move(state, bot_action(state, state.actor))
    while state.phase == Phase.PLAYING:
        seat = state.current_seat
        card = get_bot_move(state, seat)
        assert card in legal_moves(state, seat)
        state = apply_move(state, PlayCard(card, seat=seat))
    assert state.phase == Phase.FINISHED
