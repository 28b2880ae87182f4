"""
Mariáš deck: 32 cards (4 suits × 8 ranks).
Point values: Ace and Ten count 10, everything else 0.
Two rank orders: suit contracts (10 just below A) and no-trump contracts (Betl, Durch).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Suit(str, Enum):
    """Srdce (hearts), Listy (leaves), Žalude (acorns), Gule (bells). Order used for tie-breaks."""
    HEARTS = "Srdce"
    LEAVES = "Listy"
    ACORNS = "Žalude"
    BELLS = "Gule"


class Rank(str, Enum):
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


SUITS: tuple[Suit, ...] = tuple(Suit)
RANKS: tuple[Rank, ...] = tuple(Rank)

CARD_POINTS = 10

_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.LEAVES: "♠",
    Suit.ACORNS: "♣",
    Suit.BELLS: "♦",
}


@dataclass(frozen=True)
class Card:
    """A single card: suit + rank."""

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        # Accept raw values ("Srdce", "A") as well as enum members.
        object.__setattr__(self, "suit", Suit(self.suit))
        object.__setattr__(self, "rank", Rank(self.rank))

    def point_value(self) -> int:
        """Ace and Ten are worth 10 points; all other ranks are worth nothing."""
        return CARD_POINTS if self.rank in (Rank.ACE, Rank.TEN) else 0

    def is_scoring(self) -> bool:
        return self.point_value() > 0

    def __str__(self) -> str:
        return f"{self.rank.value}{_SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return str(self)


class RankOrder(Enum):
    """
    Total order over the 8 ranks, selected by the contract family.

    SUIT:     7 < 8 < 9 < J < Q < K < 10 < A  (Hra, Sedma, Sto, 100+7)
    NO_TRUMP: 7 < 8 < 9 < 10 < J < Q < K < A  (Betl, Durch)
    """

    SUIT = (Rank.SEVEN, Rank.EIGHT, Rank.NINE, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.TEN, Rank.ACE)
    NO_TRUMP = (Rank.SEVEN, Rank.EIGHT, Rank.NINE, Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE)

    def strength(self, card: Card | Rank) -> int:
        """Position of the rank in this order, 0 (weakest) .. 7 (strongest)."""
        rank = card.rank if isinstance(card, Card) else card
        return self.value.index(rank)

    def beats(self, card: Card, other: Card) -> bool:
        """True if card outranks other. Only meaningful within one suit."""
        return self.strength(card) > self.strength(other)

    def sort_key(self, card: Card) -> tuple[int, int]:
        """Strength first, suit order second; stable tie-break across suits."""
        return self.strength(card), SUITS.index(card.suit)


def make_deck_32() -> list[Card]:
    """Build the full 32-card deck, suit-major then ascending rank."""
    deck: list[Card] = []
    for s in Suit:
        for r in Rank:
            deck.append(Card(s, r))
    return deck
