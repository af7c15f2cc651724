import patterns
from cell import Cell, Position
from errors import InvalidPlayerError, InvalidPositionError

__all__ = ["BoardState", "Cell", "Position"]


class BoardState:
    """3x3 grid of Cell markers.

    Boards are values: search code copies them before changing a cell and
    compares them cell by cell. Cells are stored row-major in a flat list,
    cell (i, j) at index ``i * 3 + j``.
    """

    __slots__ = ("_cells",)

    def __init__(self):
        self._cells = [Cell.EMPTY] * 9

    @classmethod
    def from_rows(cls, rows):
        """Build a board from three strings such as ``["XO ", " X ", "  O"]``."""
        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise InvalidPositionError(
                "Board needs exactly 3 rows of 3 cells", context={"rows": rows}
            )
        board = cls()
        board._cells = [Cell.from_symbol(symbol) for row in rows for symbol in row]
        return board

    @staticmethod
    def _index(pos):
        row, col = pos
        if not (0 <= row < 3 and 0 <= col < 3):
            raise InvalidPositionError(
                "Position outside the board", context={"row": row, "col": col}
            )
        return row * 3 + col

    @property
    def cells(self):
        """Read-only snapshot of the grid as three row tuples."""
        return tuple(tuple(self._cells[i * 3:i * 3 + 3]) for i in range(3))

    def copy(self):
        board = BoardState()
        board._cells = self._cells[:]
        return board

    def get(self, pos):
        return self._cells[self._index(pos)]

    def is_empty_cell(self, pos):
        return self.get(pos) is Cell.EMPTY

    def get_possible_moves(self):
        return [Position(index // 3, index % 3)
                for index, cell in enumerate(self._cells) if cell is Cell.EMPTY]

    def get_one_difference(self, other):
        """First position (row-major) where the two boards differ, or None.

        Only meaningful when the boards differ by a single move.
        """
        for index, (mine, theirs) in enumerate(zip(self._cells, other._cells)):
            if mine is not theirs:
                return Position(index // 3, index % 3)
        return None

    def set_move(self, pos, marker):
        # No occupancy check: callers validate the move first
        self._cells[self._index(pos)] = marker

    def to_bit_pair(self):
        return patterns.encode(self)

    def is_won(self):
        return patterns.winner(self.to_bit_pair())

    def is_over(self):
        return Cell.EMPTY not in self._cells

    def evaluate(self, player):
        """Score the board for ``player``.

        A won board is worth +100 for the winner and -100 for the loser.
        Otherwise each two-in-line pattern that ``player`` can still complete
        adds 10. The opponent's open lines are not subtracted.
        """
        if player is Cell.EMPTY:
            raise InvalidPlayerError("Cannot evaluate for an empty marker")

        bit_pair = self.to_bit_pair()
        won_by = patterns.winner(bit_pair)
        if won_by is not None:
            return patterns.WIN_SCORE if won_by is player else -patterns.WIN_SCORE

        own = bit_pair.bits_for(player)
        other = bit_pair.bits_for(player.opposite())
        return patterns.TWO_IN_LINE_SCORE * patterns.count_live_pairs(own, other)

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None

    def __repr__(self):
        rows = ["".join(cell.value for cell in row) for row in self.cells]
        return f"BoardState.from_rows({rows!r})"

    def __str__(self):
        lines = []
        for i, row in enumerate(self.cells):
            lines.append("|".join(f" {cell.value} " for cell in row))
            if i < 2:
                lines.append("-----------")
        return "\n".join(lines)
