"""Board state representation for checkers."""

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import InvariantViolation, OutOfBounds
from .rules import (
    BOARD_SIZE,
    DARK_PARITY,
    PLAYER_ONE_ROWS,
    PLAYER_TWO_ROWS,
    PROMOTION_ROW_P1,
    PROMOTION_ROW_P2,
)
from .types import EMPTY, UNPLAYABLE, Cell, Player, Position, Rank


class Board:
    """
    8x8 checkers board stored as a row-major grid of cells.

    Only dark squares are used: those where (row + col) % 2 == 1.
    Row 0 is the top; Player 1 starts on rows 0-2, Player 2 on rows 5-7.
    Light squares always hold the ``UNPLAYABLE`` cell.
    """

    SIZE = BOARD_SIZE

    def __init__(self):
        """Create an empty board."""
        self._cells: List[List[Cell]] = [
            [EMPTY if self.is_playable(row, col) else UNPLAYABLE for col in range(self.SIZE)]
            for row in range(self.SIZE)
        ]

    def clone(self) -> "Board":
        """Create an independent copy of this board."""
        new_board = Board()
        new_board._cells = [list(row) for row in self._cells]
        return new_board

    @classmethod
    def initial(cls) -> "Board":
        """Create a board with the standard initial setup."""
        board = cls()

        for rows, player in ((PLAYER_ONE_ROWS, Player.ONE), (PLAYER_TWO_ROWS, Player.TWO)):
            for row in rows:
                for col in range(cls.SIZE):
                    if cls.is_playable(row, col):
                        board.set(row, col, Cell.piece(player, Rank.MAN))

        return board

    @staticmethod
    def is_playable(row: int, col: int) -> bool:
        """Check if a square is a playable (dark) square."""
        return (row + col) % 2 == DARK_PARITY

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        """Check if a position is within the board."""
        return 0 <= row < Board.SIZE and 0 <= col < Board.SIZE

    @staticmethod
    def promotion_row(player: Player) -> int:
        """Get the promotion row for a player."""
        return PROMOTION_ROW_P1 if player == Player.ONE else PROMOTION_ROW_P2

    def get(self, row: int, col: int) -> Cell:
        """Get the cell at a square."""
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col)
        return self._cells[row][col]

    def set(self, row: int, col: int, cell: Cell) -> None:
        """Write a cell to a square."""
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col)
        if self.is_playable(row, col) != cell.is_playable:
            raise InvariantViolation(
                f"Cannot place a {cell.kind.value} cell on square ({row}, {col})"
            )
        self._cells[row][col] = cell

    def __getitem__(self, pos: Position) -> Cell:
        return self.get(*pos)

    def __setitem__(self, pos: Position, cell: Cell) -> None:
        self.set(pos[0], pos[1], cell)

    def clear(self, pos: Position) -> None:
        """Empty a dark square."""
        self.set(pos[0], pos[1], EMPTY)

    def squares(self) -> Iterator[Tuple[Position, Cell]]:
        """Iterate over all dark squares and their cells."""
        for row in range(self.SIZE):
            for col in range(self.SIZE):
                if self.is_playable(row, col):
                    yield (row, col), self._cells[row][col]

    def pieces(self, player: Optional[Player] = None) -> Iterator[Tuple[Position, Cell]]:
        """Iterate over all pieces, optionally filtered by player."""
        for pos, cell in self.squares():
            if cell.is_piece and (player is None or cell.owner == player):
                yield pos, cell

    def count_pieces(self, player: Player) -> Tuple[int, int]:
        """Count (men, kings) for a player."""
        men = 0
        kings = 0
        for _, cell in self.pieces(player):
            if cell.is_king:
                kings += 1
            else:
                men += 1
        return men, kings

    def has_pieces(self, player: Player) -> bool:
        """Check if a player has any pieces on the board."""
        return any(True for _ in self.pieces(player))

    def selected_squares(self) -> List[Position]:
        """Squares holding a piece marked as selected."""
        return [pos for pos, cell in self.pieces() if cell.is_selected]

    def candidate_squares(self) -> List[Position]:
        """Squares marked as candidate destinations."""
        return [pos for pos, cell in self.squares() if cell.is_candidate]

    def to_compact(self) -> Dict[str, list]:
        """Convert the piece placement to a compact dict of position lists."""
        data: Dict[str, list] = {"p1_men": [], "p1_kings": [], "p2_men": [], "p2_kings": []}

        for pos, cell in self.pieces():
            prefix = "p1" if cell.owner == Player.ONE else "p2"
            suffix = "kings" if cell.is_king else "men"
            data[f"{prefix}_{suffix}"].append([pos[0], pos[1]])

        return data

    @classmethod
    def from_compact(cls, data: dict) -> "Board":
        """Create a board from compact format. Markers are not restored."""
        board = cls()

        layout = (
            ("p1_men", Player.ONE, Rank.MAN),
            ("p1_kings", Player.ONE, Rank.KING),
            ("p2_men", Player.TWO, Rank.MAN),
            ("p2_kings", Player.TWO, Rank.KING),
        )
        for key, player, rank in layout:
            for row, col in data.get(key, []):
                if not board.get(row, col).is_empty:
                    raise InvariantViolation(f"Square ({row}, {col}) listed twice")
                board.set(row, col, Cell.piece(player, rank))

        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __str__(self) -> str:
        """String representation of the board."""
        lines = ["  0 1 2 3 4 5 6 7"]
        for row in range(self.SIZE):
            row_str = f"{row} "
            for col in range(self.SIZE):
                cell = self._cells[row][col]
                row_str += str(cell) + ("*" if cell.is_selected else " ")
            lines.append(row_str.rstrip())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board({sum(1 for _ in self.pieces())} pieces)"
