"""
Rules - Win and draw detection over a board.

Every function here is pure: it reads a board and returns a value.
"""

from __future__ import annotations

from .state import Board, Mark


WINNING_TRIPLES: tuple[tuple[int, int, int], ...] = (
    # rows
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    # columns
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    # diagonals
    (0, 4, 8), (2, 4, 6),
)


def check_winner(board: Board) -> Mark | None:
    """
    Return the mark that fills a winning triple, or None.

    A triple only counts when all three cells are non-empty and identical.
    """
    for a, b, c in WINNING_TRIPLES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


def is_board_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def empty_cells(board: Board) -> list[int]:
    """Indices of the empty cells, in board order."""
    return [index for index, cell in enumerate(board) if cell is None]


def evaluate(board: Board) -> tuple[Mark | None, bool]:
    """
    Evaluate a board after a move.

    Returns (winner, is_over). A draw is (None, True).
    """
    winner = check_winner(board)
    if winner is not None:
        return winner, True
    return None, is_board_full(board)
