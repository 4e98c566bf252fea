"""
Pytest fixtures for tictac tests.
"""

import pytest

from ..bots import FirstLegalPolicy
from ..engine_core.action import Action
from ..engine_core.reducer import apply_action
from ..engine_core.state import GameState, Mark
from ..session import GameSession, SessionManager

# Short enough to keep the suite fast, long enough to act before it fires
TEST_DELAY = 0.02


def board_from(text: str) -> tuple:
    """
    Build a board from a 9-character string.

    'R' is the human (rabbit), 'C' the opponent (carrot), '.' empty.
    """
    marks = {"R": Mark.HUMAN, "C": Mark.OPPONENT, ".": None}
    assert len(text) == 9
    return tuple(marks[ch] for ch in text)


def play_moves(state: GameState, moves: list[int]) -> GameState:
    """
    Apply alternating human/opponent moves, starting with the human.

    Every move must be accepted.
    """
    for index in moves:
        if state.active_turn is Mark.HUMAN:
            action = Action.cell_activated(index)
        else:
            action = Action.opponent_move(index, state.epoch)
        result = apply_action(state, action)
        assert result.applied, f"move {index} was ignored: {result.reason}"
        state = result.new_state
    return state


@pytest.fixture
def fresh_state() -> GameState:
    """Empty board, human to move."""
    return GameState.initial()


@pytest.fixture
def opponent_turn_state(fresh_state: GameState) -> GameState:
    """Human took the centre; opponent to move."""
    return apply_action(fresh_state, Action.cell_activated(4)).new_state


@pytest.fixture
def drawn_state(fresh_state: GameState) -> GameState:
    """
    Full board with no line:

        R C R
        R C C
        C R R
    """
    return play_moves(fresh_state, [0, 1, 2, 4, 3, 5, 7, 6, 8])


@pytest.fixture
def session() -> GameSession:
    """A session whose opponent always takes the lowest empty cell."""
    game = GameSession(bot=FirstLegalPolicy(), opponent_delay=TEST_DELAY)
    yield game
    game.close()


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager(opponent_delay=TEST_DELAY, bot_factory=FirstLegalPolicy)
