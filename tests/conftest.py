"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def default_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and start from defaults."""
    from checkers import config

    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(tmp_path / "settings.yaml"))
    config.set_config(config.Config())
    yield config.get_config()
    config.set_config(None)


@pytest.fixture
def initial_game_state():
    """Create an initial game state."""
    from checkers.game_state import GameState
    return GameState.initial()


@pytest.fixture
def sample_board():
    """Create an initial board."""
    from checkers.board import Board
    return Board.initial()


@pytest.fixture
def make_state():
    """Build a game state from a compact piece layout."""
    from checkers.board import Board
    from checkers.config import RuleSettings
    from checkers.game_state import GameState
    from checkers.types import Player

    def _make(turn=Player.ONE, rules=None, **layout):
        return GameState(
            board=Board.from_compact(layout),
            current_player=turn,
            rules=rules if rules is not None else RuleSettings(),
        )

    return _make
