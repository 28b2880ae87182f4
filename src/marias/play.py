"""
Trick-taking: legal moves and trick winner.
Must follow suit and beat the best card of the led suit if possible; without the led suit,
must trump and overtrump if possible. Betl and Durch have no trump obligation.
"""
from __future__ import annotations

from typing import Sequence

from .deck import Card, RankOrder, Suit
from .state import Trick


def led_suit(plays: Sequence[tuple[int, Card]]) -> Suit | None:
    """Suit of the first card in the trick, or None for an empty trick."""
    if not plays:
        return None
    return plays[0][1].suit


def highest_of_suit(plays: Sequence[tuple[int, Card]], suit: Suit, order: RankOrder) -> Card | None:
    """Strongest card of suit already in the trick, or None if that suit was not played."""
    best: Card | None = None
    for _, c in plays:
        if c.suit == suit and (best is None or order.beats(c, best)):
            best = c
    return best


def cards_of_suit(hand: Sequence[Card], suit: Suit) -> list[Card]:
    return [c for c in hand if c.suit == suit]


def legal_plays(
    hand: Sequence[Card],
    plays: Sequence[tuple[int, Card]],
    trump: Suit | None,
    order: RankOrder = RankOrder.SUIT,
) -> list[Card]:
    """
    Cards from hand that can legally be played onto the trick so far.
    trump is the trump in force (None for Betl/Durch); plays is a list of (seat, card).
    """
    if not plays:
        return list(hand)

    lead = led_suit(plays)
    following = cards_of_suit(hand, lead)
    if following:
        best = highest_of_suit(plays, lead, order)
        beating = [c for c in following if order.beats(c, best)]
        return beating if beating else following

    if trump is not None:
        trumps = cards_of_suit(hand, trump)
        if trumps:
            best_trump = highest_of_suit(plays, trump, order)
            if best_trump is not None:
                over = [c for c in trumps if order.beats(c, best_trump)]
                if over:
                    return over
            return trumps

    return list(hand)


def _takes_over(card: Card, best: Card, trump: Suit | None, order: RankOrder) -> bool:
    """True if card replaces best as the provisional winner."""
    if trump is not None and card.suit == trump:
        return best.suit != trump or order.beats(card, best)
    # best is always of the led suit or trump, so off-suit discards never win.
    return card.suit == best.suit and order.beats(card, best)


def trick_winner(
    plays: Sequence[tuple[int, Card]],
    trump: Suit | None,
    order: RankOrder = RankOrder.SUIT,
) -> int:
    """
    Seat currently winning the (possibly partial) trick.
    Trump beats the led suit; higher trump wins; otherwise the highest card of the led suit.
    """
    if not plays:
        raise ValueError("Cannot determine the winner of an empty trick")
    best_seat, best_card = plays[0]
    for seat, card in plays[1:]:
        if _takes_over(card, best_card, trump, order):
            best_seat, best_card = seat, card
    return best_seat


def resolve_trick(trick: Trick, trump: Suit | None, is_no_trump: bool) -> int:
    """Winner of a trick; in no-trump contracts the trump suit is ignored and 10 ranks below J."""
    order = RankOrder.NO_TRUMP if is_no_trump else RankOrder.SUIT
    return trick_winner(trick.plays, None if is_no_trump else trump, order)
