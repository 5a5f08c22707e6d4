"""Game engine - the interface a host UI drives."""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .config import RuleSettings, get_config
from .game_state import ClickOutcome, GameState
from .types import Cell, Move, Player

logger = logging.getLogger(__name__)


# -- Procedural interface ---------------------------------------------------

def new_game(rules: Optional[RuleSettings] = None) -> GameState:
    """Create a game in the opening position with Player ONE to move."""
    if rules is None:
        rules = get_config().game.rules
    return GameState.initial(rules)


def select_square(state: GameState, row: int, col: int) -> GameState:
    """Feed a click into the game and return the (mutated) state."""
    state.select_square(row, col)
    return state


def cell_at(state: GameState, row: int, col: int) -> Cell:
    return state.cell_at(row, col)


def current_turn(state: GameState) -> Player:
    return state.current_player


def is_selected(state: GameState, row: int, col: int) -> bool:
    return state.is_selected(row, col)


def winner(state: GameState) -> Optional[Player]:
    return state.winner()


# -- Host facade ------------------------------------------------------------

@dataclass
class GameResult:
    """Result of a completed game."""
    winner: Player
    total_moves: int
    final_state: GameState


class Engine:
    """
    Owns one game and notifies the host when it changes.

    The host forwards translated clicks to ``select_square`` and redraws
    from the read-only queries when ``on_state_changed`` fires.
    """

    def __init__(self, rules: Optional[RuleSettings] = None):
        self.rules = replace(rules if rules is not None else get_config().game.rules)
        self.state: GameState = GameState.initial(self.rules)

        # Callbacks
        self.on_state_changed: Optional[Callable[[GameState], None]] = None
        self.on_game_over: Optional[Callable[[GameResult], None]] = None

    def new_game(self) -> None:
        """Start a new game."""
        self.state = GameState.initial(self.rules)
        logger.info("New game started")
        self._notify_state_changed()

    @property
    def current_turn(self) -> Player:
        return self.state.current_player

    @property
    def legal_moves(self) -> List[Move]:
        """Moves offered for the selected piece."""
        return self.state.legal_moves

    def cell_at(self, row: int, col: int) -> Cell:
        return self.state.cell_at(row, col)

    def is_selected(self, row: int, col: int) -> bool:
        return self.state.is_selected(row, col)

    def winner(self) -> Optional[Player]:
        return self.state.winner()

    def select_square(self, row: int, col: int) -> ClickOutcome:
        """
        Handle a click on a board square.

        Listeners are notified only when the click changed something.
        """
        if self.state.is_terminal():
            return ClickOutcome.IGNORED

        outcome = self.state.select_square(row, col)
        if outcome == ClickOutcome.IGNORED:
            return outcome

        self._notify_state_changed()

        if outcome in (ClickOutcome.MOVED, ClickOutcome.CONTINUED):
            result_winner = self.state.winner()
            if result_winner is not None:
                result = GameResult(
                    winner=result_winner,
                    total_moves=self.state.move_count,
                    final_state=self.state,
                )
                logger.info("Game over after %d moves: Player %d wins",
                            result.total_moves, int(result.winner))
                if self.on_game_over:
                    self.on_game_over(result)

        return outcome

    def _notify_state_changed(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_changed:
            self.on_state_changed(self.state)
