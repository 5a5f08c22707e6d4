"""Type definitions for checkers."""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

from .errors import InvariantViolation


class Player(IntEnum):
    """Player identifiers."""
    ONE = 1  # Starts on rows 0-2, moves downward (increasing row)
    TWO = 2  # Starts on rows 5-7, moves upward (decreasing row)

    def opponent(self) -> "Player":
        """Return the opposing player."""
        return Player.TWO if self == Player.ONE else Player.ONE


class Rank(Enum):
    """Rank of a piece."""
    MAN = "man"
    KING = "king"


class CellKind(Enum):
    """The exclusive categories a square can be in."""
    UNPLAYABLE = "unplayable"
    EMPTY = "empty"
    PIECE = "piece"
    CANDIDATE = "candidate"


# Type alias for board positions
Position = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """
    Contents of one square.

    A ``PIECE`` cell carries an owner and a rank and may be marked as the
    selected piece. A ``CANDIDATE`` cell marks a legal destination and
    carries the rank the moving piece would have after landing there.
    ``EMPTY`` and ``UNPLAYABLE`` carry nothing.
    """
    kind: CellKind
    owner: Optional[Player] = None
    rank: Optional[Rank] = None
    selected: bool = False

    def __post_init__(self):
        if self.kind == CellKind.PIECE:
            if self.owner is None or self.rank is None:
                raise InvariantViolation("A piece needs both an owner and a rank")
        elif self.kind == CellKind.CANDIDATE:
            if self.owner is not None or self.rank is None or self.selected:
                raise InvariantViolation("A candidate carries only a rank")
        elif self.owner is not None or self.rank is not None or self.selected:
            raise InvariantViolation(f"A {self.kind.value} cell carries no data")

    @classmethod
    def piece(cls, owner: Player, rank: Rank = Rank.MAN, selected: bool = False) -> "Cell":
        return cls(CellKind.PIECE, owner, rank, selected)

    @classmethod
    def candidate(cls, rank: Rank) -> "Cell":
        return cls(CellKind.CANDIDATE, rank=rank)

    @property
    def is_piece(self) -> bool:
        return self.kind == CellKind.PIECE

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def is_candidate(self) -> bool:
        return self.kind == CellKind.CANDIDATE

    @property
    def is_playable(self) -> bool:
        return self.kind != CellKind.UNPLAYABLE

    @property
    def is_vacant(self) -> bool:
        """True if a piece may land here (candidate markers are annotations)."""
        return self.kind in (CellKind.EMPTY, CellKind.CANDIDATE)

    @property
    def is_king(self) -> bool:
        return self.kind == CellKind.PIECE and self.rank == Rank.KING

    @property
    def is_selected(self) -> bool:
        return self.selected

    def with_selected(self, selected: bool) -> "Cell":
        """Return this piece with its selection marker set or cleared."""
        if not self.is_piece:
            raise InvariantViolation(f"Cannot select a {self.kind.value} cell")
        return Cell(CellKind.PIECE, self.owner, self.rank, selected)

    def __str__(self) -> str:
        if self.kind == CellKind.UNPLAYABLE:
            return " "
        if self.kind == CellKind.EMPTY:
            return "."
        if self.kind == CellKind.CANDIDATE:
            return "+"
        char = "o" if self.owner == Player.ONE else "x"
        return char.upper() if self.rank == Rank.KING else char


EMPTY = Cell(CellKind.EMPTY)
UNPLAYABLE = Cell(CellKind.UNPLAYABLE)


def owner_of(cell: Cell) -> Optional[Player]:
    """Owner of the piece on a cell, or None."""
    return cell.owner if cell.is_piece else None


def rank_of(cell: Cell) -> Optional[Rank]:
    """Rank of the piece on a cell, or None."""
    return cell.rank if cell.is_piece else None


class MoveKind(Enum):
    """Kinds of single-step moves."""
    SIMPLE = "simple"
    CAPTURE = "capture"


@dataclass(frozen=True)
class SimpleMove:
    """
    A one-square diagonal step onto a vacant square.

    Attributes:
        start: Square the piece leaves.
        end: Square the piece lands on.
        results_in_king: True if the piece is a king after landing.
    """
    start: Position
    end: Position
    results_in_king: bool = False

    kind = MoveKind.SIMPLE

    @property
    def is_capture(self) -> bool:
        return False

    def __repr__(self) -> str:
        king = ", king" if self.results_in_king else ""
        return f"SimpleMove({self.start}->{self.end}{king})"


@dataclass(frozen=True)
class CaptureMove:
    """
    A two-square diagonal jump over an opposing piece.

    Attributes:
        start: Square the piece leaves.
        end: Square the piece lands on.
        captured: Square of the jumped piece, midway between start and end.
        results_in_king: True if the piece is a king after landing.
    """
    start: Position
    end: Position
    captured: Position
    results_in_king: bool = False

    kind = MoveKind.CAPTURE

    @property
    def is_capture(self) -> bool:
        return True

    def __repr__(self) -> str:
        king = ", king" if self.results_in_king else ""
        return f"CaptureMove({self.start}->{self.end} x{self.captured}{king})"


Move = Union[SimpleMove, CaptureMove]
