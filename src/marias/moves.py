"""
Moves accepted by engine.apply_move.

``seat`` is optional on every move: when given it must be the seat expected to act,
which lets a front end reject input from the wrong player.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .bidding import Contract
from .deck import Card, Suit


@dataclass(frozen=True)
class ChooseTrump:
    suit: Suit
    seat: Optional[int] = None


@dataclass(frozen=True)
class ChooseContract:
    contract: Contract
    announced: bool = False  # openly pre-announced: doubles the wager
    seat: Optional[int] = None


@dataclass(frozen=True)
class DiscardTalon:
    cards: tuple[Card, ...]
    seat: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))


@dataclass(frozen=True)
class PlayCard:
    card: Card
    seat: Optional[int] = None


@dataclass(frozen=True)
class RaiseFlek:
    """Double the wager: defenders raise odd levels (Flek, Tutti, Kalhoty), the actor even ones."""
    seat: Optional[int] = None


Move = Union[ChooseTrump, ChooseContract, DiscardTalon, PlayCard, RaiseFlek]


__all__ = ["ChooseTrump", "ChooseContract", "DiscardTalon", "PlayCard", "RaiseFlek", "Move"]
