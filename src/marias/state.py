"""
Game state for one hand of Mariáš.

All types are immutable values. The engine produces a new GameState per move with
dataclasses.replace, rebuilding only the seat, trick and history tuples it touches.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional

from .bidding import Contract, is_no_trump, rank_order_for
from .deal import NUM_SEATS, deal_hands, shuffle_deck
from .deck import Card, RankOrder, Suit, make_deck_32


class Phase(str, Enum):
    BIDDING = "BIDDING"
    TALON = "TALON"
    PLAYING = "PLAYING"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class Trick:
    """Lead seat plus up to 3 (seat, card) plays in play order."""

    lead_seat: int
    plays: tuple[tuple[int, Card], ...] = ()

    def is_empty(self) -> bool:
        return not self.plays

    def is_complete(self) -> bool:
        return len(self.plays) == NUM_SEATS

    def cards(self) -> list[Card]:
        return [c for _, c in self.plays]

    def with_play(self, seat: int, card: Card) -> "Trick":
        return replace(self, plays=self.plays + ((seat, card),))


@dataclass(frozen=True)
class Announcement:
    """Hláška: King + Queen of one suit, 20 (or 40 in trump)."""

    suit: Suit
    value: int


@dataclass(frozen=True)
class Seat:
    hand: tuple[Card, ...] = ()
    collected: tuple[Card, ...] = ()
    announcements: tuple[Announcement, ...] = ()

    def holds(self, card: Card) -> bool:
        return card in self.hand

    def without(self, *cards: Card) -> "Seat":
        """Copy of this seat with cards removed from the hand."""
        removed = set(cards)
        return replace(self, hand=tuple(c for c in self.hand if c not in removed))

    def announced(self, suit: Suit) -> bool:
        return any(a.suit == suit for a in self.announcements)


@dataclass(frozen=True)
class GameState:
    """Aggregate root: everything needed to continue or score a hand."""

    seats: tuple[Seat, Seat, Seat]
    seed: int
    phase: Phase = Phase.BIDDING
    trump: Optional[Suit] = None
    contract: Optional[Contract] = None
    current_trick: Trick = field(default_factory=lambda: Trick(lead_seat=0))
    history: tuple[Trick, ...] = ()
    talon: tuple[Card, ...] = ()
    actor: int = 0
    current_seat: int = 0
    flek_level: int = 0
    announced: bool = False

    @property
    def is_no_trump(self) -> bool:
        return is_no_trump(self.contract)

    @property
    def rank_order(self) -> RankOrder:
        return rank_order_for(self.contract)

    @property
    def effective_trump(self) -> Optional[Suit]:
        """Trump suit in force for play; None in Betl/Durch or before bidding."""
        return None if self.is_no_trump else self.trump

    def hand(self, seat: int) -> tuple[Card, ...]:
        return self.seats[seat].hand

    def defenders(self) -> tuple[int, int]:
        a, b = (s for s in range(NUM_SEATS) if s != self.actor)
        return a, b

    def played_cards(self) -> Iterator[Card]:
        """Cards already visible on the table: archived tricks and the open trick."""
        for trick in self.history:
            yield from trick.cards()
        yield from self.current_trick.cards()

    def all_cards(self) -> list[Card]:
        """Every card in every location (hands, collected piles, talon, open trick)."""
        cards: list[Card] = []
        for seat in self.seats:
            cards.extend(seat.hand)
            cards.extend(seat.collected)
        cards.extend(self.talon)
        cards.extend(self.current_trick.cards())
        return cards

    def with_seat(self, index: int, seat: Seat) -> "GameState":
        seats = list(self.seats)
        seats[index] = seat
        return replace(self, seats=(seats[0], seats[1], seats[2]))


def _empty_seats() -> tuple[Seat, Seat, Seat]:
    return (Seat(), Seat(), Seat())


def create_initial_state(seed: int, forhont: int = 0) -> GameState:
    """Empty Bidding state: no cards dealt yet, forhont is the actor."""
    return GameState(
        seats=_empty_seats(),
        seed=seed,
        current_trick=Trick(lead_seat=forhont),
        actor=forhont,
        current_seat=forhont,
    )


def new_game(seed: int, forhont: int = 0) -> GameState:
    """Initial state with the seeded deck dealt: forhont holds 12 cards, the others 10."""
    state = create_initial_state(seed, forhont=forhont)
    deal = deal_hands(shuffle_deck(make_deck_32(), seed), forhont=forhont)
    seats = tuple(Seat(hand=tuple(h)) for h in deal.hands)
    return replace(state, seats=(seats[0], seats[1], seats[2]))
