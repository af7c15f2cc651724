"""
Shared pytest fixtures for the tic-tac-toe tests.

Board fixtures are function-scoped so tests can mutate them freely; the
enumeration of every reachable position is session-scoped because it is
expensive and read-only.
"""
import pytest

from board import BoardState
from cell import Cell
from helpers import brute_force_winner


def _explore(board, player, seen):
    key = repr(board)
    if key in seen:
        return
    seen[key] = board.copy()
    if brute_force_winner(board) is not None or board.is_over():
        return
    for move in board.get_possible_moves():
        board.set_move(move, player)
        _explore(board, player.opposite(), seen)
        board.set_move(move, Cell.EMPTY)


@pytest.fixture(scope="session")
def reachable_boards():
    """Every position reachable from the empty board with X moving first."""
    seen = {}
    _explore(BoardState(), Cell.CROSS, seen)
    return list(seen.values())


@pytest.fixture
def empty_board():
    return BoardState()


@pytest.fixture
def board_from():
    """Factory building a BoardState from three row strings."""
    return BoardState.from_rows
