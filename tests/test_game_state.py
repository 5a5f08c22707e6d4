"""
Tests for the click-driven selection state machine and move execution.
"""

import logging

import pytest

from checkers.board import Board
from checkers.config import RuleSettings
from checkers.errors import InvariantViolation, OutOfBounds
from checkers.game_state import ClickOutcome, GameState
from checkers.rules import DARK_SQUARE_COUNT
from checkers.types import UNPLAYABLE, CaptureMove, Cell, Player, Rank, SimpleMove


def assert_consistent(state: GameState) -> None:
    """Check the board and selection invariants."""
    board = state.board
    dark = 0
    for row in range(8):
        for col in range(8):
            cell = board.get(row, col)
            if Board.is_playable(row, col):
                dark += 1
                assert cell.is_piece or cell.is_empty or cell.is_candidate
            else:
                assert cell == UNPLAYABLE
    assert dark == DARK_SQUARE_COUNT

    selected = board.selected_squares()
    if state.selection is None:
        assert selected == []
        assert board.candidate_squares() == []
    else:
        assert selected == [state.selection.position]
        assert sorted(board.candidate_squares()) == sorted(state.selection.destinations)
        piece = board[state.selection.position]
        fresh = state.moves_for(state.selection.position)
        if state.selection.locked:
            fresh = [m for m in fresh if m.is_capture]
        assert piece.owner == state.current_player
        assert state.selection.legal_moves == fresh


class TestGameState:
    """Tests for GameState basics."""

    def test_initial_state(self, initial_game_state):
        state = initial_game_state

        assert state.current_player == Player.ONE
        assert state.selection is None
        assert state.move_count == 0
        assert state.winner() is None
        assert not state.is_terminal()
        assert_consistent(state)

    def test_out_of_bounds_click(self, initial_game_state):
        with pytest.raises(OutOfBounds):
            initial_game_state.select_square(8, 0)
        with pytest.raises(OutOfBounds):
            initial_game_state.is_selected(0, -1)

    def test_str_shows_turn(self, initial_game_state):
        assert str(initial_game_state).startswith("Turn: Player 1 | Move #0")


class TestSelection:
    """Tests for picking pieces up."""

    def test_select_marks_candidates(self, initial_game_state):
        state = initial_game_state

        outcome = state.select_square(2, 1)

        assert outcome == ClickOutcome.SELECTED
        assert state.is_selected(2, 1)
        assert state.board.get(2, 1).is_selected
        assert state.board.get(3, 0) == Cell.candidate(Rank.MAN)
        assert state.board.get(3, 2) == Cell.candidate(Rank.MAN)
        assert_consistent(state)

    def test_blocked_piece_is_ignored(self, initial_game_state):
        state = initial_game_state

        assert state.select_square(0, 1) == ClickOutcome.IGNORED
        assert state.selection is None

    def test_opponent_piece_is_ignored(self, initial_game_state):
        assert initial_game_state.select_square(5, 0) == ClickOutcome.IGNORED
        assert initial_game_state.selection is None

    def test_light_square_is_ignored(self, initial_game_state):
        assert initial_game_state.select_square(0, 0) == ClickOutcome.IGNORED

    def test_misclick_keeps_selection(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        assert state.select_square(4, 1) == ClickOutcome.IGNORED
        assert state.select_square(5, 0) == ClickOutcome.IGNORED
        assert state.select_square(0, 1) == ClickOutcome.IGNORED

        assert state.is_selected(2, 1)
        assert_consistent(state)

    def test_misclick_clears_selection_when_configured(self):
        state = GameState.initial(RuleSettings(keep_selection_on_miss=False))
        state.select_square(2, 1)

        assert state.select_square(4, 1) == ClickOutcome.DESELECTED
        assert state.selection is None
        assert_consistent(state)

    def test_switching_selection(self, initial_game_state):
        """Picking another piece moves the highlight."""
        state = initial_game_state
        state.select_square(2, 1)

        assert state.select_square(2, 3) == ClickOutcome.SELECTED

        assert not state.is_selected(2, 1)
        assert state.is_selected(2, 3)
        assert state.board.get(3, 0).is_empty
        assert sorted(state.selection.destinations) == [(3, 2), (3, 4)]
        assert_consistent(state)

    def test_forced_capture(self, make_state):
        """Only captures are offered when the piece can capture."""
        state = make_state(p1_men=[[2, 1]], p2_men=[[3, 2], [7, 0]])

        state.select_square(2, 1)

        assert state.legal_moves == [CaptureMove((2, 1), (4, 3), captured=(3, 2))]
        assert state.board.get(3, 0).is_empty
        assert_consistent(state)

    def test_forced_capture_disabled(self, make_state):
        state = make_state(
            rules=RuleSettings(forced_capture=False),
            p1_men=[[2, 1]],
            p2_men=[[3, 2], [7, 0]],
        )

        state.select_square(2, 1)

        assert [move.end for move in state.legal_moves] == [(3, 0), (4, 3)]

    def test_selection_is_logged(self, initial_game_state, caplog):
        caplog.set_level(logging.DEBUG, logger="checkers")

        initial_game_state.select_square(2, 1)

        assert "selected (2, 1)" in caplog.text


class TestMoveExecution:
    """Tests for committing moves."""

    def test_opening_move(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        outcome = state.select_square(3, 0)

        assert outcome == ClickOutcome.MOVED
        assert state.board.get(2, 1).is_empty
        assert state.board.get(3, 0) == Cell.piece(Player.ONE, Rank.MAN)
        assert state.board.get(3, 2).is_empty
        assert state.current_player == Player.TWO
        assert state.selection is None
        assert state.move_count == 1
        assert_consistent(state)

    def test_turn_alternates_once(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)
        state.select_square(3, 0)
        state.select_square(5, 2)
        state.select_square(4, 1)

        assert state.current_player == Player.ONE
        assert state.move_count == 2

    def test_capture(self, make_state):
        state = make_state(p1_men=[[2, 1]], p2_men=[[3, 2], [7, 0]])
        state.select_square(2, 1)

        outcome = state.select_square(4, 3)

        assert outcome == ClickOutcome.MOVED
        assert state.board.get(2, 1).is_empty
        assert state.board.get(3, 2).is_empty
        assert state.board.get(4, 3) == Cell.piece(Player.ONE, Rank.MAN)
        assert state.current_player == Player.TWO
        assert_consistent(state)

    def test_multi_jump(self, make_state):
        """A capture that leaves another jump keeps the turn and the piece."""
        state = make_state(p1_men=[[2, 1], [0, 1]], p2_men=[[3, 2], [5, 4], [7, 0]])
        state.select_square(2, 1)

        outcome = state.select_square(4, 3)

        assert outcome == ClickOutcome.CONTINUED
        assert state.current_player == Player.ONE
        assert state.is_selected(4, 3)
        assert state.selection.locked
        assert state.legal_moves == [CaptureMove((4, 3), (6, 5), captured=(5, 4))]
        assert state.board.get(5, 2).is_empty
        assert_consistent(state)

        # Other pieces and plain squares cannot interrupt the sequence
        assert state.select_square(0, 1) == ClickOutcome.IGNORED
        assert state.select_square(5, 2) == ClickOutcome.IGNORED
        assert state.is_selected(4, 3)
        assert state.winner() is None

        assert state.select_square(6, 5) == ClickOutcome.MOVED
        assert state.board.get(5, 4).is_empty
        assert state.board.get(6, 5) == Cell.piece(Player.ONE, Rank.MAN)
        assert state.current_player == Player.TWO
        assert state.selection is None
        assert_consistent(state)

    def test_multi_jump_disabled(self, make_state):
        state = make_state(
            rules=RuleSettings(multi_jump=False),
            p1_men=[[2, 1]],
            p2_men=[[3, 2], [5, 4]],
        )
        state.select_square(2, 1)

        assert state.select_square(4, 3) == ClickOutcome.MOVED
        assert state.current_player == Player.TWO

    @pytest.mark.parametrize("end", [(7, 0), (7, 2)])
    def test_promotion_player_one(self, make_state, end):
        state = make_state(p1_men=[[6, 1]], p2_men=[[4, 5]])
        state.select_square(6, 1)

        assert state.board[end] == Cell.candidate(Rank.KING)

        state.select_square(*end)

        assert state.board[end] == Cell.piece(Player.ONE, Rank.KING)
        assert state.current_player == Player.TWO

    def test_promotion_player_two(self, make_state):
        state = make_state(turn=Player.TWO, p2_men=[[1, 2]], p1_men=[[4, 5]])
        state.select_square(1, 2)
        state.select_square(0, 3)

        assert state.board.get(0, 3) == Cell.piece(Player.TWO, Rank.KING)
        assert state.current_player == Player.ONE

    def test_promotion_by_capture(self, make_state):
        state = make_state(p1_men=[[5, 2]], p2_men=[[6, 3], [0, 7]])
        state.select_square(5, 2)

        state.select_square(7, 4)

        assert state.board.get(7, 4).is_king
        assert state.board.get(6, 3).is_empty
        assert state.current_player == Player.TWO

    def test_king_keeps_rank(self, make_state):
        state = make_state(p1_kings=[[4, 3]], p2_men=[[7, 0]])
        state.select_square(4, 3)
        state.select_square(3, 2)

        assert state.board.get(3, 2) == Cell.piece(Player.ONE, Rank.KING)

    def test_mismatched_move_start(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), SimpleMove((2, 3), (3, 4)))

    def test_move_without_selection(self, initial_game_state):
        state = initial_game_state

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), SimpleMove((2, 1), (3, 2)))
        assert state.board.get(2, 1).is_piece
        assert state.board.get(3, 2).is_empty
        assert state.current_player == Player.ONE

    def test_move_from_unselected_square(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 3), SimpleMove((2, 3), (3, 4)))
        assert state.board.get(2, 3).is_piece
        assert state.current_player == Player.ONE

    def test_move_from_emptied_square(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)
        state.board.clear((2, 1))

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), SimpleMove((2, 1), (3, 0)))

    def test_move_onto_occupied_square(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), SimpleMove((2, 1), (1, 0)))
        assert state.board.get(1, 0).is_piece

    def test_capture_without_victim(self, initial_game_state):
        state = initial_game_state
        state.select_square(2, 1)

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), CaptureMove((2, 1), (4, 3), captured=(3, 2)))
        assert state.board.get(2, 1).is_piece

    def test_move_not_offered(self, make_state):
        """A simple step is refused while the selected piece must capture."""
        state = make_state(p1_men=[[2, 1]], p2_men=[[3, 2], [7, 0]])
        state.select_square(2, 1)

        with pytest.raises(InvariantViolation):
            state.execute_move((2, 1), SimpleMove((2, 1), (3, 0)))
        assert state.board.get(2, 1).is_selected
        assert state.board.get(3, 0).is_empty
        assert state.current_player == Player.ONE

    def test_rules_are_copied(self):
        """Changing the rules object after a game starts does not affect it."""
        rules = RuleSettings()
        state = GameState.initial(rules)

        rules.forced_capture = False

        assert state.rules is not rules
        assert state.rules.forced_capture

class TestWinner:
    """Tests for end-of-game detection."""

    def test_no_pieces_loses(self, make_state):
        state = make_state(turn=Player.TWO, p1_men=[[2, 1]])

        assert state.winner() == Player.ONE
        assert state.is_terminal()

    def test_no_moves_loses(self, make_state):
        state = make_state(turn=Player.TWO, p1_men=[[4, 1]], p2_men=[[0, 1]])

        assert state.winner() == Player.ONE
        assert state.select_square(0, 1) == ClickOutcome.IGNORED

    def test_no_moves_without_rule(self, make_state):
        state = make_state(
            turn=Player.TWO,
            rules=RuleSettings(no_moves_loses=False),
            p1_men=[[4, 1]],
            p2_men=[[0, 1]],
        )

        assert state.winner() is None

    def test_winner_after_last_capture(self, make_state):
        state = make_state(p1_men=[[2, 1]], p2_men=[[3, 2]])
        state.select_square(2, 1)
        state.select_square(4, 3)

        assert state.current_player == Player.TWO
        assert state.winner() == Player.ONE


class TestPlaythrough:
    """Invariants over a long sequence of real clicks."""

    def test_invariants_hold(self, initial_game_state):
        state = initial_game_state

        for _ in range(300):
            if state.winner() is not None:
                break
            if state.selection is None or not state.selection.locked:
                movable = [
                    pos for pos, _ in state.board.pieces(state.current_player)
                    if state.moves_for(pos)
                ]
                row, col = movable[0]
                assert state.select_square(row, col) == ClickOutcome.SELECTED
                assert_consistent(state)

            mover = state.current_player
            offered = state.legal_moves
            outcome = state.select_square(*offered[-1].end)
            assert_consistent(state)

            if outcome == ClickOutcome.CONTINUED:
                assert state.current_player == mover
                assert all(move.is_capture for move in state.legal_moves)
            else:
                assert outcome == ClickOutcome.MOVED
                assert state.current_player == mover.opponent()
            if any(move.is_capture for move in offered):
                assert all(move.is_capture for move in offered)
