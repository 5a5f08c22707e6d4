"""Move generation for checkers."""

from typing import List, Tuple

from .board import Board
from .errors import InvariantViolation
from .rules import (
    BACKWARD_DIRECTIONS_P1,
    BACKWARD_DIRECTIONS_P2,
    FORWARD_DIRECTIONS_P1,
    FORWARD_DIRECTIONS_P2,
)
from .types import CaptureMove, Move, Player, Position, Rank, SimpleMove


def get_forward_directions(player: Player) -> List[Tuple[int, int]]:
    """Get the forward diagonal directions for a player."""
    return FORWARD_DIRECTIONS_P1 if player == Player.ONE else FORWARD_DIRECTIONS_P2


def get_backward_directions(player: Player) -> List[Tuple[int, int]]:
    """Get the backward diagonal directions for a player."""
    return BACKWARD_DIRECTIONS_P1 if player == Player.ONE else BACKWARD_DIRECTIONS_P2


def get_move_directions(owner: Player, rank: Rank) -> List[Tuple[int, int]]:
    """Get all valid step directions for a piece, forward ones first."""
    if rank == Rank.KING:
        return get_forward_directions(owner) + get_backward_directions(owner)
    return get_forward_directions(owner)


def generate_moves(board: Board, pos: Position, owner: Player, rank: Rank) -> List[Move]:
    """
    Generate every single-step move for a piece.

    Each direction yields at most one move: a simple step onto a vacant
    neighbour, or a jump over an adjacent opposing piece onto the vacant
    square beyond it. Multi-jump continuation and the forced-capture policy
    are left to the caller.

    Args:
        board: The current board.
        pos: Square the piece stands on.
        owner: Player owning the piece.
        rank: Current rank of the piece.

    Returns:
        Moves in direction order (forward-left, forward-right, then
        backward-left, backward-right for kings).
    """
    row, col = pos
    moves: List[Move] = []
    promotion_row = Board.promotion_row(owner)
    is_king = rank == Rank.KING

    for dr, dc in get_move_directions(owner, rank):
        step_row, step_col = row + dr, col + dc
        if not Board.in_bounds(step_row, step_col):
            continue

        neighbour = board.get(step_row, step_col)
        if neighbour.is_vacant:
            moves.append(SimpleMove(
                start=pos,
                end=(step_row, step_col),
                results_in_king=is_king or step_row == promotion_row,
            ))
            continue

        if neighbour.owner == owner:
            continue

        land_row, land_col = row + 2 * dr, col + 2 * dc
        if Board.in_bounds(land_row, land_col) and board.get(land_row, land_col).is_vacant:
            moves.append(CaptureMove(
                start=pos,
                end=(land_row, land_col),
                captured=(step_row, step_col),
                results_in_king=is_king or land_row == promotion_row,
            ))

    return moves


def enforce_forced_capture(moves: List[Move]) -> List[Move]:
    """Keep only the captures if there is at least one."""
    captures = [move for move in moves if move.is_capture]
    return captures if captures else moves


def generate_piece_moves(board: Board, pos: Position) -> List[Move]:
    """Generate moves for whatever piece stands on a square."""
    cell = board[pos]
    if not cell.is_piece:
        raise InvariantViolation(f"No piece at {pos}")
    return generate_moves(board, pos, cell.owner, cell.rank)


def has_legal_moves(board: Board, player: Player) -> bool:
    """Check if any of a player's pieces can move."""
    for pos, cell in board.pieces(player):
        if generate_moves(board, pos, cell.owner, cell.rank):
            return True
    return False
