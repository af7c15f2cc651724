from board import BoardState
from cell import Cell, Position
from errors import InvalidMoveError

DRAW = "Draw"


class TicTacToe:
    def __init__(self):
        self.board = BoardState()
        self.current_player = Cell.CROSS  # X goes first
        self.winner = None
        self.history = []
        self.redo_stack = []

    def reset_game(self):
        self.board = BoardState()
        self.current_player = Cell.CROSS
        self.winner = None
        self.history = []
        self.redo_stack = []

    def _snapshot(self):
        return {
            'board': self.board.copy(),
            'player': self.current_player,
            'winner': self.winner,
        }

    def _restore(self, state):
        self.board = state['board']
        self.current_player = state['player']
        self.winner = state['winner']

    def make_move(self, row, col, strict=False):
        """Play the current player's marker at (row, col).

        Returns False for an illegal move, or raises InvalidMoveError when
        ``strict`` is set.
        """
        reason = None
        if self.winner is not None:
            reason = "Game is already over"
        elif not (0 <= row < 3 and 0 <= col < 3):
            reason = "Position outside the board"
        elif not self.board.is_empty_cell(Position(row, col)):
            reason = "Cell already taken"

        if reason is not None:
            if strict:
                raise InvalidMoveError(reason, context={"row": row, "col": col})
            return False

        self.history.append(self._snapshot())
        self.redo_stack = []  # Clear redo stack on new move

        self.board.set_move(Position(row, col), self.current_player)
        self.check_winner()

        # Switch players if game isn't over
        if not self.winner:
            self.current_player = self.current_player.opposite()
        return True

    def undo(self):
        if len(self.history) > 0:
            self.redo_stack.append(self._snapshot())
            self._restore(self.history.pop())
            return True
        return False

    def redo(self):
        if len(self.redo_stack) > 0:
            self.history.append(self._snapshot())
            self._restore(self.redo_stack.pop())
            return True
        return False

    def check_winner(self):
        won_by = self.board.is_won()
        if won_by is not None:
            self.winner = won_by
        elif self.board.is_over():
            self.winner = DRAW

    def get_available_moves(self):
        return self.board.get_possible_moves()

    def is_game_over(self):
        return self.winner is not None

    def status_message(self, human_marker):
        """Outcome from the human player's side, or None while the game runs."""
        if self.winner is None:
            return None
        if self.winner == DRAW:
            return "It's a draw"
        return "You won" if self.winner is human_marker else "You lost"
