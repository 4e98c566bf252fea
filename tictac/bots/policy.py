"""
Bot Policy - Interface for opponent decision-making.

A BotPolicy takes a game state and returns a decision: which empty cell
the opponent marks. There is no look-ahead and no evaluation; the
default opponent picks uniformly among legal moves.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING, Sequence

from ..engine_core.rules import empty_cells

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The cell to mark
    - Explanation (for UI/debugging)
    """
    index: int
    explanation: str = ""
    evaluated_moves: int = 0


def select_random_move(empty_indices: Sequence[int], rng: random.Random) -> int | None:
    """
    Pick one of the empty indices uniformly at random.

    Returns None when there is nothing to pick.
    """
    if not empty_indices:
        return None
    return rng.choice(list(empty_indices))


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    ``select_move`` returns None when the board has no empty cell; callers
    treat that as a silent no-op.
    """

    @abstractmethod
    def select_move(self, state: GameState) -> BotDecision | None:
        """
        Select a move for the current state.

        Args:
            state: Current game state

        Returns:
            BotDecision with the selected cell, or None
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects moves uniformly at random.

    Pass a seed (or a ready-made ``random.Random``) for reproducible games.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def select_move(self, state: GameState) -> BotDecision | None:
        legal = empty_cells(state.board)
        index = select_random_move(legal, self.rng)
        if index is None:
            return None
        return BotDecision(
            index=index,
            explanation="Selected randomly",
            evaluated_moves=len(legal),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the lowest empty cell.

    Used for deterministic testing.
    """

    def select_move(self, state: GameState) -> BotDecision | None:
        legal = empty_cells(state.board)
        if not legal:
            return None
        return BotDecision(
            index=legal[0],
            explanation="Selected first legal move",
            evaluated_moves=1,
        )
