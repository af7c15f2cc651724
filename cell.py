from enum import Enum
from typing import NamedTuple

from errors import InvalidPlayerError


class Cell(Enum):
    """Marker held by one square of the board."""
    CROSS = 'X'
    CIRCLE = 'O'
    EMPTY = ' '

    def opposite(self):
        if self is Cell.CROSS:
            return Cell.CIRCLE
        if self is Cell.CIRCLE:
            return Cell.CROSS
        return Cell.EMPTY

    @classmethod
    def from_symbol(cls, symbol):
        """Parse 'X', 'O' or a blank ('', ' ', '.', '-') into a Cell."""
        if symbol is None:
            return cls.EMPTY
        symbol = symbol.strip().upper()
        if symbol in ('', '.', '-'):
            return cls.EMPTY
        try:
            return cls(symbol)
        except ValueError:
            raise InvalidPlayerError("Unknown marker symbol", context={"symbol": symbol}) from None

    def __str__(self):
        return self.value


class Position(NamedTuple):
    row: int
    col: int
