"""Game rules constants for checkers."""

# Board dimensions
BOARD_SIZE = 8
DARK_SQUARE_COUNT = 32

# Dark squares satisfy (row + col) % 2 == DARK_PARITY
DARK_PARITY = 1

# Starting rows for each player
PLAYER_ONE_ROWS = range(0, 3)  # Rows 0, 1, 2
PLAYER_TWO_ROWS = range(5, 8)  # Rows 5, 6, 7

# Diagonal directions for moves, (row_delta, col_delta).
# Order is forward-left, forward-right; backward-left, backward-right.
# Player 1 moves downward (increasing row), Player 2 upward.
FORWARD_DIRECTIONS_P1 = [(1, -1), (1, 1)]
FORWARD_DIRECTIONS_P2 = [(-1, -1), (-1, 1)]
BACKWARD_DIRECTIONS_P1 = [(-1, -1), (-1, 1)]
BACKWARD_DIRECTIONS_P2 = [(1, -1), (1, 1)]

# Promotion
PROMOTION_ROW_P1 = 7
PROMOTION_ROW_P2 = 0
