"""Checkers rules engine: board, move generation and click-driven play."""

from .board import Board
from .config import Config, RuleSettings, get_config
from .engine import (
    Engine,
    GameResult,
    cell_at,
    current_turn,
    is_selected,
    new_game,
    select_square,
    winner,
)
from .errors import CheckersError, InvariantViolation, OutOfBounds
from .game_state import ClickOutcome, GameState
from .movegen import generate_moves
from .selection import Selection, reset_potentials
from .types import (
    CaptureMove,
    Cell,
    CellKind,
    Move,
    MoveKind,
    Player,
    Position,
    Rank,
    SimpleMove,
    owner_of,
    rank_of,
)

__version__ = "1.0.0"

__all__ = [
    'Board',
    'CaptureMove',
    'Cell',
    'CellKind',
    'CheckersError',
    'ClickOutcome',
    'Config',
    'Engine',
    'GameResult',
    'GameState',
    'InvariantViolation',
    'Move',
    'MoveKind',
    'OutOfBounds',
    'Player',
    'Position',
    'Rank',
    'RuleSettings',
    'Selection',
    'SimpleMove',
    'cell_at',
    'current_turn',
    'generate_moves',
    'get_config',
    'is_selected',
    'new_game',
    'owner_of',
    'rank_of',
    'reset_potentials',
    'select_square',
    'winner',
]
