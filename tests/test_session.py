"""Tests for the game session: bot scheduling, stale work and rejected moves."""
import pytest

from marias.bot import bot_action
from marias.errors import InvalidPhaseError
from marias.moves import PlayCard
from marias.persistence import InMemoryRepository
from marias.session import GameSession
from marias.state import Phase, new_game


class _Handle:
    def __init__(self, fn):
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class _ManualScheduler:
    """Collects scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.handles = []
        self.delays = []

    def __call__(self, delay, fn):
        handle = _Handle(fn)
        self.handles.append(handle)
        self.delays.append(delay)
        return handle

    def live(self):
        return [h for h in self.handles if not h.cancelled]

    def run_pending(self):
        live = self.live()
        self.handles = []
        for h in live:
            h.fn()


def _run_until_idle(session: GameSession, scheduler: _ManualScheduler, limit: int = 100):
    for _ in range(limit):
        if not scheduler.live():
            return
        scheduler.run_pending()
    raise AssertionError("bots did not settle")


def test_bots_play_a_whole_game():
    scheduler = _ManualScheduler()
    repo = InMemoryRepository()
    session = GameSession(repository=repo, bot_seats=(0, 1, 2), bot_delay=0.5, scheduler=scheduler)
    session.new_game(seed=4)
    assert len(scheduler.live()) == 1
    assert scheduler.delays[0] == 0.5

    _run_until_idle(session, scheduler)
    assert session.state.phase == Phase.FINISHED
    assert session.acting_seat() is None
    assert repo.load() == session.state


def test_human_seat_waits_for_input():
    scheduler = _ManualScheduler()
    session = GameSession(bot_seats=(1, 2), scheduler=scheduler)
    session.new_game(seed=8, forhont=0)
    assert session.acting_seat() == 0
    assert not scheduler.live()

    while session.state.phase != Phase.PLAYING:
        session.submit(bot_action(session.state, 0))
    assert not scheduler.live()

    legal = session.legal_moves()
    session.submit(PlayCard(legal[0], seat=0))
    assert session.acting_seat() == 1
    assert len(scheduler.live()) == 1

    _run_until_idle(session, scheduler)
    # Bots keep playing until the human seat is due again.
    assert len(session.state.history) >= 1
    assert session.acting_seat() == 0


def test_new_game_cancels_pending_bot_move():
    scheduler = _ManualScheduler()
    session = GameSession(bot_seats=(0, 1, 2), scheduler=scheduler)
    session.new_game(seed=1)
    first = scheduler.handles[0]

    session.new_game(seed=2)
    assert first.cancelled

    # A timer that fired anyway must not touch the new game.
    before = session.state
    first.fn()
    assert session.state is before


def test_stale_bot_move_after_human_move_is_dropped():
    scheduler = _ManualScheduler()
    session = GameSession(bot_seats=(0,), scheduler=scheduler)
    session.new_game(seed=5, forhont=0)
    stale = scheduler.handles[0]

    # The human front end moves for seat 0 before the bot fires.
    session.submit(bot_action(session.state, 0))
    assert stale.cancelled
    after_human = session.state
    stale.fn()
    assert session.state is after_human


def test_rejected_move_keeps_state():
    session = GameSession(bot_seats=(), scheduler=_ManualScheduler())
    session.new_game(seed=3)
    before = session.state
    with pytest.raises(InvalidPhaseError):
        session.submit(PlayCard(before.hand(0)[0]))
    assert session.state is before


def test_submit_without_game():
    session = GameSession(scheduler=_ManualScheduler())
    assert session.acting_seat() is None
    assert session.legal_moves() == []
    with pytest.raises(RuntimeError):
        session.submit(PlayCard(new_game(1).hand(0)[0]))


def test_resume_from_repository():
    repo = InMemoryRepository()
    session = GameSession(repository=repo, bot_seats=(), scheduler=_ManualScheduler())
    assert not session.resume()

    saved = new_game(11, forhont=1)
    repo.save(saved)
    assert session.resume()
    assert session.state == saved
    assert session.acting_seat() == 1
