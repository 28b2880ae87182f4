"""
GameState snapshots and the repository used to keep the current game.

A snapshot is a plain JSON-compatible dict that restores the exact state. There is
no schema version: whoever owns the storage medium is responsible for migrations.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .bidding import Contract
from .deck import Card, Suit
from .state import Announcement, GameState, Phase, Seat, Trick

log = logging.getLogger(__name__)


def _card_to_dict(card: Card) -> Dict[str, str]:
    return {"suit": card.suit.value, "rank": card.rank.value}


def _card_from_dict(d: Dict[str, str]) -> Card:
    return Card(d["suit"], d["rank"])


def _trick_to_dict(trick: Trick) -> Dict[str, Any]:
    return {
        "lead_seat": trick.lead_seat,
        "plays": [{"seat": s, "card": _card_to_dict(c)} for s, c in trick.plays],
    }


def _trick_from_dict(d: Dict[str, Any]) -> Trick:
    return Trick(
        lead_seat=int(d["lead_seat"]),
        plays=tuple((int(p["seat"]), _card_from_dict(p["card"])) for p in d.get("plays", [])),
    )


def _seat_to_dict(seat: Seat) -> Dict[str, Any]:
    return {
        "hand": [_card_to_dict(c) for c in seat.hand],
        "collected": [_card_to_dict(c) for c in seat.collected],
        "announcements": [{"suit": a.suit.value, "value": a.value} for a in seat.announcements],
    }


def _seat_from_dict(d: Dict[str, Any]) -> Seat:
    return Seat(
        hand=tuple(_card_from_dict(c) for c in d.get("hand", [])),
        collected=tuple(_card_from_dict(c) for c in d.get("collected", [])),
        announcements=tuple(
            Announcement(suit=Suit(a["suit"]), value=int(a["value"]))
            for a in d.get("announcements", [])
        ),
    )


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Serialize a GameState to a JSON-compatible dict."""
    return {
        "seed": state.seed,
        "phase": state.phase.value,
        "trump": state.trump.value if state.trump is not None else None,
        "contract": state.contract.value if state.contract is not None else None,
        "current_trick": _trick_to_dict(state.current_trick),
        "history": [_trick_to_dict(t) for t in state.history],
        "seats": [_seat_to_dict(s) for s in state.seats],
        "talon": [_card_to_dict(c) for c in state.talon],
        "actor": state.actor,
        "current_seat": state.current_seat,
        "flek_level": state.flek_level,
        "announced": state.announced,
    }


def state_from_dict(d: Dict[str, Any]) -> GameState:
    """Restore a GameState from a dict produced by state_to_dict."""
    seats = tuple(_seat_from_dict(s) for s in d["seats"])
    if len(seats) != 3:
        raise ValueError(f"Snapshot must have 3 seats, got {len(seats)}")
    return GameState(
        seats=(seats[0], seats[1], seats[2]),
        seed=int(d["seed"]),
        phase=Phase(d["phase"]),
        trump=Suit(d["trump"]) if d.get("trump") is not None else None,
        contract=Contract(d["contract"]) if d.get("contract") is not None else None,
        current_trick=_trick_from_dict(d["current_trick"]),
        history=tuple(_trick_from_dict(t) for t in d.get("history", [])),
        talon=tuple(_card_from_dict(c) for c in d.get("talon", [])),
        actor=int(d.get("actor", 0)),
        current_seat=int(d.get("current_seat", 0)),
        flek_level=int(d.get("flek_level", 0)),
        announced=bool(d.get("announced", False)),
    )


def state_to_json(state: GameState) -> str:
    """Serialize a GameState to a JSON string."""
    return json.dumps(state_to_dict(state), ensure_ascii=False, indent=2)


def state_from_json(s: str) -> GameState:
    """Deserialize a GameState from a JSON string."""
    return state_from_dict(json.loads(s))


class GameRepository(Protocol):
    """Storage for the single saved game."""

    def save(self, state: GameState) -> None:
        ...

    def load(self) -> Optional[GameState]:
        ...

    def clear(self) -> None:
        ...


class InMemoryRepository:
    """Keeps the snapshot in memory (tests, embedded front ends)."""

    def __init__(self) -> None:
        self._snapshot: Optional[str] = None

    def save(self, state: GameState) -> None:
        self._snapshot = state_to_json(state)

    def load(self) -> Optional[GameState]:
        if self._snapshot is None:
            return None
        return state_from_json(self._snapshot)

    def clear(self) -> None:
        self._snapshot = None


class JsonFileRepository:
    """Keeps the snapshot in one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def save(self, state: GameState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(state_to_json(state), encoding="utf-8")

    def load(self) -> Optional[GameState]:
        """Saved state, or None if there is no file or it cannot be read."""
        if not self.path.exists():
            return None
        try:
            return state_from_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, KeyError, TypeError) as exc:
            log.warning("Failed to load game from %s: %s", self.path, exc)
            return None

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


__all__ = [
    "state_to_dict",
    "state_from_dict",
    "state_to_json",
    "state_from_json",
    "GameRepository",
    "InMemoryRepository",
    "JsonFileRepository",
]
