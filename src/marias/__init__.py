"""Mariáš game engine (3 players, 32-card deck)."""

__version__ = "0.1.0"

from .deck import Card, Rank, RankOrder, Suit, make_deck_32
from .deal import Deal, deal_hands, next_seat, shuffle_deck
from .bidding import Contract, contract_multiplier, is_no_trump, needs_trump_seven, rank_order_for
from .state import Announcement, GameState, Phase, Seat, Trick, create_initial_state, new_game
from .moves import ChooseContract, ChooseTrump, DiscardTalon, Move, PlayCard, RaiseFlek
from .errors import (
    IllegalMoveError,
    InvalidPhaseError,
    InvalidStateError,
    InvalidTalonError,
    MariasError,
)
from .play import legal_plays, resolve_trick, trick_winner
from .engine import apply_move, legal_moves
from .rules import DEFAULT_RULESET, Ruleset, load_ruleset
from .scoring import (
    ScoreResult,
    calculate_final_score,
    evaluate_contract,
    settle,
    wager_value,
)
from .bot import bot_action, get_bot_move
from .game import DealResult, run_deal, run_match
from .persistence import (
    GameRepository,
    InMemoryRepository,
    JsonFileRepository,
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
from .session import GameSession
