"""
Score calculation: card points (A, 10 = 10 each), ultimo (+10 for the last trick) and
announcements (20, or 40 in trump). The actor is scored alone, the two defenders pooled.
Wager: contract multiplier × 2^flek, doubled again if the contract was announced openly.
"""
from __future__ import annotations

from dataclasses import dataclass

from .bidding import Contract, is_no_trump, needs_hundred, needs_trump_seven
from .deck import Card, Rank
from .play import resolve_trick
from .rules import DEFAULT_RULESET, Ruleset
from .state import GameState, Phase, Seat


@dataclass(frozen=True)
class ScoreResult:
    actor_points: int
    defense_points: int
    actor_announcements: int
    defense_announcements: int
    winner: str  # "actor" | "defense"

    @property
    def actor_total(self) -> int:
        return self.actor_points + self.actor_announcements

    @property
    def defense_total(self) -> int:
        return self.defense_points + self.defense_announcements


def points_in_cards(cards, rules: Ruleset = DEFAULT_RULESET) -> int:
    """Ace and Ten count card_points each."""
    return sum(rules.card_points for c in cards if c.rank in (Rank.ACE, Rank.TEN))


def announcement_points(seat: Seat) -> int:
    return sum(a.value for a in seat.announcements)


def last_trick_winner(state: GameState) -> int | None:
    """Resolved winner of the last archived trick, or None before the first trick ends."""
    if not state.history:
        return None
    return resolve_trick(state.history[-1], state.trump, state.is_no_trump)


def _raw_points(state: GameState, rules: Ruleset) -> tuple[int, int]:
    actor_points = points_in_cards(state.seats[state.actor].collected, rules)
    defense_points = sum(points_in_cards(state.seats[d].collected, rules) for d in state.defenders())
    ultimo = last_trick_winner(state)
    if ultimo is not None:
        if ultimo == state.actor:
            actor_points += rules.ultimo_points
        else:
            defense_points += rules.ultimo_points
    return actor_points, defense_points


def _actor_announcements_for_sto(state: GameState, rules: Ruleset) -> int:
    seat = state.seats[state.actor]
    if rules.sto_counts_single_meld:
        return max((a.value for a in seat.announcements), default=0)
    return announcement_points(seat)


def actor_seven_wins_last_trick(state: GameState) -> bool:
    """
    True only if the actor played the trump seven in the final trick and that trick
    resolved to the actor (so the seven itself took it).
    """
    if not state.history or state.trump is None:
        return False
    last = state.history[-1]
    seven = Card(state.trump, Rank.SEVEN)
    played_by_actor = any(s == state.actor and c == seven for s, c in last.plays)
    return played_by_actor and last_trick_winner(state) == state.actor


def _contract_made(state: GameState, rules: Ruleset) -> bool:
    contract = state.contract
    actor = state.seats[state.actor]
    if contract == Contract.BETL:
        return len(actor.collected) == 0
    if contract == Contract.DURCH:
        return len(actor.collected) == 30

    actor_points, defense_points = _raw_points(state, rules)
    if contract == Contract.HRA:
        defense_ann = sum(announcement_points(state.seats[d]) for d in state.defenders())
        return actor_points + announcement_points(actor) > defense_points + defense_ann

    made = True
    if needs_hundred(contract):
        made = actor_points + _actor_announcements_for_sto(state, rules) >= rules.sto_target
    if needs_trump_seven(contract):
        made = made and actor_seven_wins_last_trick(state)
    return made


def evaluate_contract(state: GameState, rules: Ruleset = DEFAULT_RULESET) -> bool:
    """True if the actor fulfilled the contract. Always False before the hand is finished."""
    if state.phase != Phase.FINISHED or state.contract is None:
        return False
    return _contract_made(state, rules)


def calculate_final_score(state: GameState, rules: Ruleset = DEFAULT_RULESET) -> ScoreResult:
    """
    Point and announcement tally per side.
    Betl and Durch void points and announcements; only the tricks matter there.
    """
    winner = "actor" if evaluate_contract(state, rules) else "defense"
    if is_no_trump(state.contract):
        return ScoreResult(0, 0, 0, 0, winner)

    actor_points, defense_points = _raw_points(state, rules)
    return ScoreResult(
        actor_points=actor_points,
        defense_points=defense_points,
        actor_announcements=announcement_points(state.seats[state.actor]),
        defense_announcements=sum(announcement_points(state.seats[d]) for d in state.defenders()),
        winner=winner,
    )


def wager_value(state: GameState, rules: Ruleset = DEFAULT_RULESET) -> int:
    """Contract multiplier × 2^flek_level, doubled if the contract was announced."""
    if state.contract is None:
        return 0
    value = rules.multiplier(state.contract) * 2 ** state.flek_level
    if state.announced:
        value *= rules.announced_multiplier
    return value


def mark_3p_with_actor(deal_score: int, actor: int) -> tuple[int, int, int]:
    """
    Per-seat scores: actor gets 2 * deal_score, each defender -deal_score. Sum = 0.
    """
    scores = [-deal_score, -deal_score, -deal_score]
    scores[actor] = 2 * deal_score
    return (scores[0], scores[1], scores[2])


def settle(state: GameState, rules: Ruleset = DEFAULT_RULESET) -> tuple[int, int, int]:
    """Zero-sum payout of a finished hand: + wager if the contract was made, - wager otherwise."""
    value = wager_value(state, rules)
    deal_score = value if evaluate_contract(state, rules) else -value
    return mark_3p_with_actor(deal_score, state.actor)
