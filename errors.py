"""
Error hierarchy for the tic-tac-toe engine and its front-ends.

Every custom exception inherits from TicTacToeError so callers can catch the
whole family at once. Programming errors (bad coordinates, Empty used as a
player) also subclass ValueError.
"""

from typing import Any, Dict, Optional

__all__ = [
    "ConfigurationError",
    "InvalidMoveError",
    "InvalidPlayerError",
    "InvalidPositionError",
    "MoveNotInTreeError",
    "TicTacToeError",
]


class TicTacToeError(Exception):
    """Base exception for all tic-tac-toe errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "TICTACTOE_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class InvalidPositionError(TicTacToeError, ValueError):
    """Coordinate outside the 3x3 grid."""
    code: str = "INVALID_POSITION"


class InvalidPlayerError(TicTacToeError, ValueError):
    """Empty or unknown marker passed where a player is required."""
    code: str = "INVALID_PLAYER"


class InvalidMoveError(TicTacToeError):
    """Move rejected by the game session (occupied cell, finished game, bad input)."""
    code: str = "INVALID_MOVE"


class MoveNotInTreeError(TicTacToeError):
    """Committed move has no matching child in the search tree.

    Usually means set_move was called before the tree was generated, or
    with the wrong marker for the current ply.
    """
    code: str = "MOVE_NOT_IN_TREE"


class ConfigurationError(TicTacToeError):
    """Invalid settings file or value."""
    code: str = "CONFIGURATION_ERROR"
