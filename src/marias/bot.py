"""
Heuristic opponent.

Card choice is an ordered list of rules; the first rule that returns a card wins.
Leading:   boss card with most points -> low non-scoring side card -> highest card.
Following: grease a winning partner -> win cheaply against an opponent -> discard low
           side card -> discard low trump.
No look-ahead: every rule only looks at the open trick and the cards already seen.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .bidding import Contract, is_no_trump, needs_trump_seven
from .deal import TALON_SIZE
from .deck import Card, Rank, RankOrder, Suit, make_deck_32
from .engine import legal_moves
from .moves import ChooseContract, ChooseTrump, DiscardTalon, Move, PlayCard
from .play import trick_winner
from .state import GameState, Phase


@dataclass(frozen=True)
class BotView:
    """What one seat knows when choosing a card."""

    state: GameState
    seat: int
    legal: tuple[Card, ...]

    @property
    def order(self) -> RankOrder:
        return self.state.rank_order

    @property
    def trump(self) -> Optional[Suit]:
        return self.state.effective_trump

    @property
    def plays(self):
        return self.state.current_trick.plays

    @property
    def is_actor(self) -> bool:
        return self.seat == self.state.actor

    @property
    def partner(self) -> Optional[int]:
        """The other defender, or None when this seat is the actor."""
        if self.is_actor:
            return None
        return 3 - self.state.actor - self.seat

    @property
    def acts_last(self) -> bool:
        return len(self.plays) == 2

    def provisional_winner(self) -> int:
        return trick_winner(self.plays, self.trump, self.order)

    def beating_cards(self) -> list[Card]:
        """Legal cards that would make this seat the provisional winner."""
        plays = list(self.plays)
        return [
            c for c in self.legal
            if trick_winner(plays + [(self.seat, c)], self.trump, self.order) == self.seat
        ]

    def unaccounted(self) -> set[Card]:
        """Cards neither played yet nor in this seat's hand."""
        seen = set(self.state.played_cards()) | set(self.state.hand(self.seat))
        return {c for c in make_deck_32() if c not in seen}

    def is_boss(self, card: Card, unaccounted: set[Card]) -> bool:
        """No stronger card of the same suit is still out."""
        return not any(
            c.suit == card.suit and self.order.beats(c, card) for c in unaccounted
        )

    def is_trump(self, card: Card) -> bool:
        return self.trump is not None and card.suit == self.trump

    def lowest(self, cards: Sequence[Card]) -> Card:
        return min(cards, key=self.order.sort_key)

    def highest(self, cards: Sequence[Card]) -> Card:
        return max(cards, key=self.order.sort_key)

    def most_points(self, cards: Sequence[Card]) -> Card:
        """Highest point value; among equals the weakest card, to keep strong ones."""
        top = max(c.point_value() for c in cards)
        return self.lowest([c for c in cards if c.point_value() == top])


Rule = Callable[[BotView], Optional[Card]]


# ---- Leading ----


def lead_boss_card(view: BotView) -> Optional[Card]:
    """A boss card takes the trick for sure; bank the one worth most."""
    unaccounted = view.unaccounted()
    bosses = [c for c in view.legal if view.is_boss(c, unaccounted)]
    if not bosses:
        return None
    top = max(c.point_value() for c in bosses)
    return view.highest([c for c in bosses if c.point_value() == top])


def lead_probe(view: BotView) -> Optional[Card]:
    """Probe with a cheap side card: no points, not trump."""
    probes = [c for c in view.legal if not c.is_scoring() and not view.is_trump(c)]
    return view.lowest(probes) if probes else None


def lead_highest(view: BotView) -> Optional[Card]:
    return view.highest(view.legal)


# ---- Following ----


def grease_for_partner(view: BotView) -> Optional[Card]:
    """
    Partner is winning: add points instead of contesting. Applies when the bot is last
    to play, or when it could not take the trick anyway.
    """
    if view.partner is None or view.provisional_winner() != view.partner:
        return None
    if view.acts_last or not view.beating_cards():
        return view.most_points(view.legal)
    return None


def win_cheaply(view: BotView) -> Optional[Card]:
    """An opponent is winning: take the trick with the weakest card that does it."""
    if view.provisional_winner() == view.partner:
        return None
    beating = view.beating_cards()
    return view.lowest(beating) if beating else None


def discard_low(view: BotView) -> Optional[Card]:
    """Throw the weakest side card, keeping trumps."""
    side = [c for c in view.legal if not view.is_trump(c)]
    return view.lowest(side) if side else None


def discard_low_trump(view: BotView) -> Optional[Card]:
    return view.lowest(view.legal)


LEAD_RULES: tuple[Rule, ...] = (lead_boss_card, lead_probe, lead_highest)
FOLLOW_RULES: tuple[Rule, ...] = (grease_for_partner, win_cheaply, discard_low, discard_low_trump)


def get_bot_move(state: GameState, seat: int) -> Card:
    """Pick a card for seat; always one of legal_moves(state, seat)."""
    view = BotView(state=state, seat=seat, legal=tuple(legal_moves(state, seat)))
    rules = LEAD_RULES if state.current_trick.is_empty() else FOLLOW_RULES
    for rule in rules:
        card = rule(view)
        if card is not None:
            return card
    return view.lowest(view.legal)


# ---- Bidding and talon ----


def choose_trump(hand: Sequence[Card]) -> Suit:
    """Longest suit; ties go to the stronger suit, then to suit order."""
    def key(suit: Suit):
        cards = [c for c in hand if c.suit == suit]
        strength = sum(RankOrder.SUIT.strength(c) for c in cards)
        return (len(cards), strength, -list(Suit).index(suit))
    return max(Suit, key=key)


def choose_talon_discard(state: GameState) -> tuple[Card, ...]:
    """
    Two weakest cards the rules allow to be discarded: never A/10 in trump contracts,
    never the trump seven in Sedma variants, and side suits before trumps.
    """
    order = state.rank_order
    trump = state.effective_trump
    candidates = list(state.hand(state.actor))
    if not is_no_trump(state.contract):
        candidates = [c for c in candidates if c.rank not in (Rank.ACE, Rank.TEN)]
    if needs_trump_seven(state.contract):
        candidates = [c for c in candidates if c != Card(state.trump, Rank.SEVEN)]
    candidates.sort(key=lambda c: (trump is not None and c.suit == trump, order.sort_key(c)))
    return tuple(candidates[:TALON_SIZE])


def bot_action(state: GameState, seat: int) -> Move:
    """Next move for a bot seat in any phase before Finished."""
    if state.phase == Phase.BIDDING:
        if state.trump is None:
            return ChooseTrump(choose_trump(state.hand(seat)), seat=seat)
        return ChooseContract(Contract.HRA, seat=seat)
    if state.phase == Phase.TALON:
        return DiscardTalon(choose_talon_discard(state), seat=seat)
    if state.phase == Phase.PLAYING:
        return PlayCard(get_bot_move(state, seat), seat=seat)
    raise ValueError(f"No bot action in phase {state.phase.value}")


__all__ = [
    "BotView",
    "LEAD_RULES",
    "FOLLOW_RULES",
    "get_bot_move",
    "choose_trump",
    "choose_talon_discard",
    "bot_action",
]
