"""Reference helpers shared by the tests."""
from cell import Cell

LINES = [
    [(0, 0), (0, 1), (0, 2)],
    [(1, 0), (1, 1), (1, 2)],
    [(2, 0), (2, 1), (2, 2)],
    [(0, 0), (1, 0), (2, 0)],
    [(0, 1), (1, 1), (2, 1)],
    [(0, 2), (1, 2), (2, 2)],
    [(0, 0), (1, 1), (2, 2)],
    [(0, 2), (1, 1), (2, 0)],
]


def brute_force_winner(board):
    """Check the 8 lines cell by cell, without the bitboard code."""
    cells = board.cells
    for player in (Cell.CROSS, Cell.CIRCLE):
        for line in LINES:
            if all(cells[r][c] is player for r, c in line):
                return player
    return None
