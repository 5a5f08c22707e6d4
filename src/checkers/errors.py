"""Exceptions raised by the checkers engine.

Only programming errors are raised. Clicks on irrelevant squares are
ordinary no-ops and never produce an exception.
"""


class CheckersError(Exception):
    """Base class for all engine errors."""


class OutOfBounds(CheckersError, IndexError):
    """A coordinate outside the 8x8 board was supplied."""

    def __init__(self, row: int, col: int):
        super().__init__(f"Square ({row}, {col}) is outside the board")
        self.row = row
        self.col = col


class InvariantViolation(CheckersError, RuntimeError):
    """The board or a move is inconsistent with the engine's invariants."""
