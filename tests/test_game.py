"""Tests for deal and match orchestration."""
from marias.bot import get_bot_move
from marias.bidding import Contract
from marias.bot import choose_talon_discard
from marias.game import run_deal, run_match
from marias.moves import ChooseContract, ChooseTrump, DiscardTalon
from marias.state import Phase
from marias.deck import Suit


def test_run_deal():
    result = run_deal(5, get_bot_move, forhont=1)
    assert result.state.phase == Phase.FINISHED
    assert result.state.actor == 1
    assert len(result.state.history) == 10
    assert result.made == (result.score.winner == "actor")
    assert sum(result.payoffs) == 0
    assert abs(result.payoffs[1]) == 2


def test_run_deal_with_custom_bid():
    def bid_betl(state, seat):
        if state.trump is None:
            return ChooseTrump(Suit.BELLS, seat=seat)
        if state.phase == Phase.BIDDING:
            return ChooseContract(Contract.BETL, announced=True, seat=seat)
        return DiscardTalon(choose_talon_discard(state), seat=seat)

    result = run_deal(6, get_bot_move, get_bid=bid_betl)
    assert result.state.contract == Contract.BETL
    assert result.score.actor_total == 0 and result.score.defense_total == 0
    assert abs(result.payoffs[0]) == 2 * 5 * 2


def test_run_match():
    totals, per_deal = run_match(6, get_bot_move, seed=100)
    assert len(per_deal) == 6
    assert sum(totals) == 0
    for s in range(3):
        assert totals[s] == sum(p[s] for p in per_deal)
