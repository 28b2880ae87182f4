"""
Game session: the single authoritative GameState, its repository, and bot pacing.

Moves are applied one at a time under a lock. Bot moves are scheduled as non-blocking
work keyed by (game_id, move counter); when the key no longer matches because a human
moved or a new game started, the scheduled work does nothing.
"""
from __future__ import annotations

import logging
import random
import threading
import uuid
from typing import Callable, Optional, Protocol, Sequence

from .bot import bot_action
from .deck import Card
from .engine import apply_move, legal_moves
from .errors import MariasError
from .moves import Move
from .persistence import GameRepository, InMemoryRepository
from .rules import DEFAULT_RULESET, Ruleset
from .state import GameState, Phase, new_game

log = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], Cancellable]


def thread_scheduler(delay: float, fn: Callable[[], None]) -> Cancellable:
    """Run fn once after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()
    return timer


class GameSession:
    """
    One table: a human (or several) plus bot seats.

    Usage:
        session = GameSession(bot_seats=(1, 2))
        session.new_game(seed=42)
        session.submit(ChooseTrump(Suit.BELLS))
    """

    def __init__(
        self,
        repository: GameRepository | None = None,
        bot_seats: Sequence[int] = (1, 2),
        bot_delay: float = 1.0,
        scheduler: Scheduler | None = None,
        rules: Ruleset = DEFAULT_RULESET,
    ) -> None:
        self.repository = repository if repository is not None else InMemoryRepository()
        self.bot_seats = frozenset(bot_seats)
        self.bot_delay = bot_delay
        self.scheduler = scheduler or thread_scheduler
        self.rules = rules
        self._lock = threading.RLock()
        self._state: Optional[GameState] = None
        self._game_id: Optional[str] = None
        self._move_count = 0
        self._pending: list[Cancellable] = []

    @property
    def state(self) -> Optional[GameState]:
        return self._state

    @property
    def game_id(self) -> Optional[str]:
        return self._game_id

    def acting_seat(self) -> Optional[int]:
        """Seat expected to move next, or None when there is no game or it is finished."""
        state = self._state
        if state is None or state.phase == Phase.FINISHED:
            return None
        if state.phase in (Phase.BIDDING, Phase.TALON):
            return state.actor
        return state.current_seat

    def legal_moves(self) -> list[Card]:
        with self._lock:
            if self._state is None or self._state.phase != Phase.PLAYING:
                return []
            return legal_moves(self._state, self._state.current_seat)

    def new_game(self, seed: int | None = None, forhont: int = 0) -> str:
        """Discard any current game (in any phase) and deal a new one."""
        with self._lock:
            self._cancel_pending()
            if seed is None:
                seed = random.randrange(2**31)
            self._game_id = uuid.uuid4().hex
            self._move_count = 0
            self._state = new_game(seed, forhont=forhont)
            self.repository.save(self._state)
            log.info("New game %s (seed=%d, forhont=%d)", self._game_id, seed, forhont)
            self._schedule_bot()
            return self._game_id

    def resume(self) -> bool:
        """Load the saved game from the repository; False if there is none."""
        with self._lock:
            saved = self.repository.load()
            if saved is None:
                return False
            self._cancel_pending()
            self._game_id = uuid.uuid4().hex
            self._move_count = 0
            self._state = saved
            self._schedule_bot()
            return True

    def submit(self, move: Move) -> GameState:
        """Apply move; on a fault the state is kept, the fault logged and re-raised."""
        with self._lock:
            if self._state is None:
                raise RuntimeError("No game in progress; call new_game first")
            try:
                self._apply(move)
            except MariasError as exc:
                log.warning("Rejected %r: %s", move, exc)
                raise
            self._schedule_bot()
            return self._state

    def _apply(self, move: Move) -> None:
        self._state = apply_move(self._state, move, self.rules)
        self._move_count += 1
        self.repository.save(self._state)

    def _cancel_pending(self) -> None:
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()

    def _schedule_bot(self) -> None:
        self._cancel_pending()
        seat = self.acting_seat()
        if seat is None or seat not in self.bot_seats:
            return
        key = (self._game_id, self._move_count)
        self._pending = [self.scheduler(self.bot_delay, lambda: self._run_bot(key))]

    def _run_bot(self, key: tuple[Optional[str], int]) -> None:
        with self._lock:
            if key != (self._game_id, self._move_count):
                log.debug("Dropping stale bot move for %s", key)
                return
            seat = self.acting_seat()
            if seat is None or seat not in self.bot_seats:
                return
            try:
                self._apply(bot_action(self._state, seat))
            except MariasError:
                log.exception("Bot move for seat %d failed", seat)
                return
            self._schedule_bot()


__all__ = ["Cancellable", "Scheduler", "thread_scheduler", "GameSession"]
