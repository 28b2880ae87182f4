"""
Shuffle and distribution for 3 players.
Forhont gets 7, the other two 5 each, then everyone 5 more (forhont first).
Forhont ends with 12 cards and discards 2 to the talon after choosing the contract.
"""
from __future__ import annotations

import random
from typing import NamedTuple

from .deck import Card, make_deck_32

NUM_SEATS = 3
HAND_SIZE = 10
TALON_SIZE = 2

# (seat offset from forhont, packet size) in dealing order.
DEAL_PACKETS = (
    (0, 7),
    (1, 5),
    (2, 5),
    (0, 5),
    (1, 5),
    (2, 5),
)


class Deal(NamedTuple):
    """Result of a deal. Hands are indexed by seat (0..2)."""
    hands: tuple[list[Card], list[Card], list[Card]]
    forhont: int


def next_seat(seat: int) -> int:
    """Play goes clockwise: 0 -> 1 -> 2 -> 0."""
    return (seat + 1) % NUM_SEATS


def shuffle_deck(deck: list[Card], seed: int) -> list[Card]:
    """
    Deterministic permutation of deck from an integer seed.
    The same seed always gives the same order; the input list is left untouched.
    """
    shuffled = list(deck)
    random.Random(seed).shuffle(shuffled)
    return shuffled


def deal_hands(deck: list[Card] | None = None, forhont: int = 0) -> Deal:
    """Distribute a (shuffled) 32-card deck in 7-5-5 / 5-5-5 packets."""
    if deck is None:
        deck = make_deck_32()
    if len(deck) != 32:
        raise ValueError(f"Expected a 32-card deck, got {len(deck)} cards")

    hands: list[list[Card]] = [[], [], []]
    idx = 0
    for offset, size in DEAL_PACKETS:
        seat = (forhont + offset) % NUM_SEATS
        hands[seat].extend(deck[idx:idx + size])
        idx += size

    return Deal(hands=(hands[0], hands[1], hands[2]), forhont=forhont)


def next_forhont(forhont: int) -> int:
    """Forhont rotates in play direction between deals."""
    return next_seat(forhont)
