"""Selection and highlight markers on the board."""

from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .errors import InvariantViolation
from .types import EMPTY, Cell, Move, Position, Rank


@dataclass
class Selection:
    """
    The piece currently picked up and its legal destinations.

    ``locked`` is set while a multi-jump is pending; the player may then
    only continue with this piece.
    """
    position: Position
    legal_moves: List[Move] = field(default_factory=list)
    locked: bool = False

    def move_to(self, pos: Position) -> Optional[Move]:
        """Return the legal move landing on a square, if any."""
        for move in self.legal_moves:
            if move.end == pos:
                return move
        return None

    @property
    def destinations(self) -> List[Position]:
        return [move.end for move in self.legal_moves]


def reset_potentials(board: Board) -> None:
    """Clear every candidate marker and unselect every selected piece."""
    for pos, cell in list(board.squares()):
        if cell.is_candidate:
            board[pos] = EMPTY
        elif cell.is_selected:
            board[pos] = cell.with_selected(False)


def mark_selection(board: Board, selection: Selection) -> None:
    """Mark the selected piece and each of its destinations on the board."""
    cell = board[selection.position]
    if not cell.is_piece:
        raise InvariantViolation(f"No piece to select at {selection.position}")
    board[selection.position] = cell.with_selected(True)

    for move in selection.legal_moves:
        if not board[move.end].is_vacant:
            raise InvariantViolation(f"Destination of {move!r} is occupied")
        rank = Rank.KING if move.results_in_king else Rank.MAN
        board[move.end] = Cell.candidate(rank)
