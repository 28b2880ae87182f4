"""
Contracts (záväzky) the actor can declare after choosing trump.
Hra < Sedma < Sto < 100+7 in the trump family; Betl and Durch are played without trump.
"""
from __future__ import annotations

from enum import Enum

from .deck import RankOrder


class Contract(str, Enum):
    """Contract names as they appear in snapshots."""
    HRA = "Hra"
    SEDMA = "Sedma"
    STO = "Sto"
    STO_SEDMA = "100+7"
    BETL = "Betl"
    DURCH = "Durch"


CONTRACT_NAMES = {
    Contract.HRA: "Game: take more than the defense",
    Contract.SEDMA: "Seven: win the last trick with the trump seven",
    Contract.STO: "Hundred: reach 100 with tricks and announcements",
    Contract.STO_SEDMA: "Hundred and seven",
    Contract.BETL: "Betl: take no trick",
    Contract.DURCH: "Durch: take every trick",
}

DEFAULT_MULTIPLIERS = {
    Contract.HRA: 1,
    Contract.SEDMA: 2,
    Contract.STO: 4,
    Contract.STO_SEDMA: 8,
    Contract.BETL: 5,
    Contract.DURCH: 10,
}


def contract_multiplier(contract: Contract, multipliers: dict | None = None) -> int:
    """Base wager multiplier for the contract."""
    table = multipliers if multipliers is not None else DEFAULT_MULTIPLIERS
    return table[Contract(contract)]


def is_no_trump(contract: Contract | None) -> bool:
    """Betl and Durch: no trump, no overtrump obligation, 10 ranks below J."""
    return contract in (Contract.BETL, Contract.DURCH)


def needs_trump_seven(contract: Contract | None) -> bool:
    """Sedma variants: the actor must win the last trick with the trump seven."""
    return contract in (Contract.SEDMA, Contract.STO_SEDMA)


def needs_hundred(contract: Contract | None) -> bool:
    return contract in (Contract.STO, Contract.STO_SEDMA)


def rank_order_for(contract: Contract | None) -> RankOrder:
    """Rank order in force for the contract (suit order until a contract is chosen)."""
    return RankOrder.NO_TRUMP if is_no_trump(contract) else RankOrder.SUIT
