"""Game state management for checkers."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from .board import Board
from .errors import InvariantViolation
from .config import RuleSettings
from .movegen import enforce_forced_capture, generate_moves, has_legal_moves
from .selection import Selection, mark_selection, reset_potentials
from .types import Cell, Move, Player, Position, Rank

logger = logging.getLogger(__name__)


class ClickOutcome(Enum):
    """What a call to ``select_square`` did."""
    IGNORED = "ignored"  # No-op click, nothing changed
    SELECTED = "selected"  # A piece was picked up
    DESELECTED = "deselected"  # A misclick dropped the selection
    MOVED = "moved"  # A move completed and the turn passed
    CONTINUED = "continued"  # A capture completed and another jump is mandatory


@dataclass
class GameState:
    """
    Complete game state: board, side to move and the current selection.

    The state is mutated in place by ``select_square``; hosts read it
    through the query methods and never write to the board directly.
    """
    board: Board
    current_player: Player
    selection: Optional[Selection] = None
    rules: RuleSettings = field(default_factory=RuleSettings)
    move_count: int = 0

    @classmethod
    def initial(cls, rules: Optional[RuleSettings] = None) -> "GameState":
        """Create the initial game state with its own copy of the rules."""
        return cls(
            board=Board.initial(),
            current_player=Player.ONE,
            rules=replace(rules) if rules is not None else RuleSettings(),
        )

    # -- Queries ------------------------------------------------------------

    def cell_at(self, row: int, col: int) -> Cell:
        return self.board.get(row, col)

    def is_selected(self, row: int, col: int) -> bool:
        self.board.get(row, col)  # bounds check
        return self.selection is not None and self.selection.position == (row, col)

    @property
    def legal_moves(self) -> List[Move]:
        """Moves currently offered for the selected piece."""
        return list(self.selection.legal_moves) if self.selection else []

    def moves_for(self, pos: Position) -> List[Move]:
        """Legal moves for the piece on a square under the active rules."""
        cell = self.board[pos]
        if not cell.is_piece:
            return []
        moves = generate_moves(self.board, pos, cell.owner, cell.rank)
        if self.rules.forced_capture:
            moves = enforce_forced_capture(moves)
        return moves

    def is_terminal(self) -> bool:
        """Check if the game has ended."""
        return self.winner() is not None

    def winner(self) -> Optional[Player]:
        """
        Get the winner of the game, or None while it is still running.

        A player without pieces loses. With ``no_moves_loses`` the side to
        move also loses when none of its pieces can move.
        """
        opponent = self.current_player.opponent()
        if not self.board.has_pieces(opponent):
            return self.current_player
        if not self.board.has_pieces(self.current_player):
            return opponent
        if self.selection is not None and self.selection.locked:
            return None
        if self.rules.no_moves_loses and not has_legal_moves(self.board, self.current_player):
            return opponent
        return None

    # -- Input --------------------------------------------------------------

    def select_square(self, row: int, col: int) -> ClickOutcome:
        """
        Handle a click on a square.

        A click on a candidate of the selected piece executes that move. A
        click on one of the mover's pieces that can move selects it. Any
        other click is ignored.
        """
        cell = self.board.get(row, col)
        pos = (row, col)

        if self.selection is not None:
            move = self.selection.move_to(pos)
            if move is not None:
                return self.execute_move(self.selection.position, move)
            if self.selection.locked:
                logger.debug("Ignoring %s: multi-jump pending from %s", pos, self.selection.position)
                return ClickOutcome.IGNORED

        if cell.is_piece and cell.owner == self.current_player:
            moves = self.moves_for(pos)
            if moves:
                self._select(pos, moves)
                logger.debug("Player %d selected %s: %s", self.current_player, pos, moves)
                return ClickOutcome.SELECTED

        if self.selection is not None and not self.rules.keep_selection_on_miss:
            reset_potentials(self.board)
            self.selection = None
            logger.debug("Selection cleared by click on %s", pos)
            return ClickOutcome.DESELECTED

        return ClickOutcome.IGNORED

    def execute_move(self, pos: Position, move: Move) -> ClickOutcome:
        """
        Commit a move of the selected piece.

        After a capture, if the piece can capture again the same player keeps
        the turn and the piece stays selected with only its captures on
        offer. Otherwise the turn passes.
        """
        self._check_move(pos, move)
        piece = self.board[pos]
        rank = Rank.KING if move.results_in_king else piece.rank

        self.board.clear(pos)
        self.board[move.end] = Cell.piece(piece.owner, rank)
        if move.is_capture:
            self.board.clear(move.captured)
        reset_potentials(self.board)
        self.selection = None
        self.move_count += 1
        logger.debug("Player %d played %r", self.current_player, move)

        if move.is_capture and self.rules.multi_jump:
            captures = [
                m for m in generate_moves(self.board, move.end, piece.owner, rank)
                if m.is_capture
            ]
            if captures:
                self._select(move.end, captures, locked=True)
                logger.debug("Player %d must keep jumping from %s", self.current_player, move.end)
                return ClickOutcome.CONTINUED

        self.current_player = self.current_player.opponent()
        return ClickOutcome.MOVED

    # -- Internals ----------------------------------------------------------

    def _select(self, pos: Position, moves: List[Move], locked: bool = False) -> None:
        reset_potentials(self.board)
        self.selection = Selection(position=pos, legal_moves=list(moves), locked=locked)
        mark_selection(self.board, self.selection)

    def _check_move(self, pos: Position, move: Move) -> None:
        if self.selection is None:
            raise InvariantViolation(f"No piece is selected for {move!r}")
        if pos != self.selection.position:
            raise InvariantViolation(f"{pos} is not the selected square {self.selection.position}")
        if move.start != pos:
            raise InvariantViolation(f"{move!r} does not start at {pos}")

        piece = self.board[pos]
        if not piece.is_piece:
            raise InvariantViolation(f"No piece at {pos} for {move!r}")
        if piece.owner != self.current_player:
            raise InvariantViolation(f"Piece at {pos} does not belong to Player {self.current_player}")
        if not self.board[move.end].is_vacant:
            raise InvariantViolation(f"Destination of {move!r} is occupied")

        d_row = move.end[0] - pos[0]
        d_col = move.end[1] - pos[1]
        if move.is_capture:
            midpoint = (pos[0] + d_row // 2, pos[1] + d_col // 2)
            if abs(d_row) != 2 or abs(d_col) != 2 or move.captured != midpoint:
                raise InvariantViolation(f"{move!r} is not a diagonal jump")
            captured = self.board[move.captured]
            if not captured.is_piece or captured.owner == piece.owner:
                raise InvariantViolation(f"No opposing piece to capture for {move!r}")
        elif abs(d_row) != 1 or abs(d_col) != 1:
            raise InvariantViolation(f"{move!r} is not a diagonal step")

        if move not in self.selection.legal_moves:
            raise InvariantViolation(f"{move!r} is not offered for {pos}")

    def __str__(self) -> str:
        lines = [
            f"Turn: Player {int(self.current_player)} | Move #{self.move_count}",
            str(self.board),
        ]
        winner = self.winner()
        if winner is not None:
            lines.append(f"Game Over! Winner: Player {int(winner)}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"GameState(player={self.current_player}, move={self.move_count})"
