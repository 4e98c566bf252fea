"""
Bots module - Opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy: Uniformly random legal moves
- FirstLegalPolicy: Deterministic baseline
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, select_random_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "select_random_move",
]
