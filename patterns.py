"""Bitboard encoding of a 3x3 board and the line tables used to score it.

Cell (i, j) maps to bit ``i * 3 + j``, so the top row is 0b000_000_111 and
the bottom row 0b111_000_000.
"""
from typing import NamedTuple, Optional

from cell import Cell


class BitPair(NamedTuple):
    cross_bits: int
    circle_bits: int

    def bits_for(self, player):
        if player is Cell.CROSS:
            return self.cross_bits
        if player is Cell.CIRCLE:
            return self.circle_bits
        return 0


WINNING_LINES = (
    # Rows
    0b000_000_111,
    0b000_111_000,
    0b111_000_000,
    # Columns
    0b001_001_001,
    0b010_010_010,
    0b100_100_100,
    # Diagonals
    0b100_010_001,
    0b001_010_100,
)


def _two_in_line_patterns():
    patterns = []
    for line in WINNING_LINES:
        for shift in range(9):
            block = 1 << shift
            if line & block:
                patterns.append((line ^ block, block))
    return tuple(patterns)


# (match_bits, block_bits): two cells of a line and the cell that completes it
TWO_IN_LINE_PATTERNS = _two_in_line_patterns()

WIN_SCORE = 100
TWO_IN_LINE_SCORE = 10


def encode(board):
    """Encode a BoardState into a BitPair of 9-bit masks."""
    cross_bits = 0
    circle_bits = 0
    for i, row in enumerate(board.cells):
        for j, cell in enumerate(row):
            if cell is Cell.CROSS:
                cross_bits |= 1 << (i * 3 + j)
            elif cell is Cell.CIRCLE:
                circle_bits |= 1 << (i * 3 + j)
    return BitPair(cross_bits, circle_bits)


def winner(bit_pair: BitPair) -> Optional[Cell]:
    """Return the marker owning a full line; Cross is checked first."""
    for mask in WINNING_LINES:
        if (mask & bit_pair.cross_bits) == mask:
            return Cell.CROSS
        if (mask & bit_pair.circle_bits) == mask:
            return Cell.CIRCLE
    return None


def winning_line(board) -> Optional[int]:
    """Index into WINNING_LINES of the first completed line, if any."""
    bit_pair = encode(board)
    for index, mask in enumerate(WINNING_LINES):
        if (mask & bit_pair.cross_bits) == mask or (mask & bit_pair.circle_bits) == mask:
            return index
    return None


def count_live_pairs(own_bits: int, other_bits: int) -> int:
    """Count two-in-line patterns held by ``own_bits`` that ``other_bits`` has not blocked."""
    count = 0
    for match, block in TWO_IN_LINE_PATTERNS:
        if (match & own_bits) == match and (block & other_bits) != block:
            count += 1
    return count
