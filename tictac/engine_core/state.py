"""
Game State - The single state container for a tic-tac-toe game.

Design principles:
- Immutable: all mutations return new state
- Serializable: plain values only (marks, tuples, ints)
- Epoch-stamped: every reset bumps the epoch so stale deferred moves
  can be recognised and dropped
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum


BOARD_SIZE = 9


class Mark(Enum):
    """The two marks that can occupy a cell."""
    HUMAN = "rabbit"
    OPPONENT = "carrot"

    @property
    def other(self) -> Mark:
        return Mark.OPPONENT if self is Mark.HUMAN else Mark.HUMAN


class GamePhase(Enum):
    """Derived phase of the turn controller."""
    HUMAN_TURN = "human_turn"
    OPPONENT_TURN = "opponent_turn"
    WON = "won"
    DRAW = "draw"


Cell = Mark | None
Board = tuple[Cell, ...]


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


@dataclass(frozen=True)
class GameStatus:
    """What the presentation layer needs to know about the game."""
    phase: GamePhase
    winner: Mark | None = None

    @property
    def is_over(self) -> bool:
        return self.phase in {GamePhase.WON, GamePhase.DRAW}


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer. The board is a row-major
    tuple of nine cells; ``None`` is an empty cell.
    """
    board: Board = field(default_factory=empty_board)
    active_turn: Mark = Mark.HUMAN
    winner: Mark | None = None
    is_over: bool = False

    # Bumped on every reset
    epoch: int = 0

    @classmethod
    def initial(cls, epoch: int = 0) -> GameState:
        """Empty board, human to move."""
        return cls(epoch=epoch)

    @property
    def phase(self) -> GamePhase:
        if self.winner is not None:
            return GamePhase.WON
        if self.is_over:
            return GamePhase.DRAW
        if self.active_turn is Mark.HUMAN:
            return GamePhase.HUMAN_TURN
        return GamePhase.OPPONENT_TURN

    @property
    def status(self) -> GameStatus:
        return GameStatus(phase=self.phase, winner=self.winner)

    @property
    def move_count(self) -> int:
        return sum(1 for cell in self.board if cell is not None)

    def cell(self, index: int) -> Cell:
        """Get the mark at a cell, or None if empty."""
        return self.board[index]

    def with_mark(self, index: int, mark: Mark) -> GameState:
        """Return new state with a mark placed at index."""
        new_board = list(self.board)
        new_board[index] = mark
        return self._copy_with(board=tuple(new_board))

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
