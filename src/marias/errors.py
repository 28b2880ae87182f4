"""Faults raised by the engine. None of them is transient; callers keep the prior state."""
from __future__ import annotations


class MariasError(ValueError):
    """Base class for every rejected move or invalid engine input."""


class IllegalMoveError(MariasError):
    """Card outside the legal set, wrong seat, or move out of order within a phase."""


class InvalidTalonError(MariasError):
    """Talon discard with the wrong count, unknown cards or a forbidden card."""


class InvalidPhaseError(MariasError):
    """Move type not accepted in the current phase."""


class InvalidStateError(MariasError):
    """State that a correctly driven game never reaches (e.g. legal moves for an empty hand)."""


__all__ = [
    "MariasError",
    "IllegalMoveError",
    "InvalidTalonError",
    "InvalidPhaseError",
    "InvalidStateError",
]
