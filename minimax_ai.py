import logging

from cell import Cell
from errors import InvalidPlayerError, MoveNotInTreeError
from search_tree import SearchTree

logger = logging.getLogger(__name__)


def side_to_move(board):
    """Cross always opens, so Cross moves whenever the counts are equal."""
    cells = [cell for row in board.cells for cell in row]
    crosses = cells.count(Cell.CROSS)
    circles = cells.count(Cell.CIRCLE)
    return Cell.CROSS if crosses == circles else Cell.CIRCLE


class MinimaxAI:
    """Automated player backed by a reusable SearchTree.

    The tree is built the first time the AI is asked for a move and then
    re-rooted through every committed move. Plain minimax searches the tree
    once; alpha-beta leaves pruned branches incomplete, so it searches again
    from the current root before each move.
    """

    def __init__(self, player=Cell.CIRCLE, use_pruning=False):
        self.use_pruning = use_pruning
        self.tree = None
        self._searched = False
        self.set_player(player)

    def set_player(self, player):
        """Set the player marker (X or O)."""
        if player is Cell.EMPTY:
            raise InvalidPlayerError("AI needs a concrete marker")
        self.player = player
        self.opponent = player.opposite()
        self.reset()

    def reset(self):
        self.tree = None
        self._searched = False

    def _rebuild(self, board):
        logger.info("Building search tree for %s from depth 0", self.player.value)
        self.tree = SearchTree(board, self.player)
        self._searched = False

    def observe_move(self, pos, marker):
        """Commit a move played outside the AI to the tree, if one exists."""
        if self.tree is None:
            return
        try:
            self.tree.set_move(pos, marker)
        except MoveNotInTreeError as e:
            logger.info("Dropping search tree: %s", e)
            self.reset()

    def _sync(self, board):
        if self.tree is None:
            self._rebuild(board)
            return
        if self.tree.board == board:
            return

        diff = self.tree.board.get_one_difference(board)
        if board.get(diff) is self.opponent:
            self.observe_move(diff, self.opponent)
        if self.tree is None or self.tree.board != board:
            self._rebuild(board)

    def best_move(self, board):
        """Pick and commit the AI's move on ``board``; None if there is nothing to play."""
        if board.is_won() is not None or board.is_over():
            return None
        if side_to_move(board) is not self.player:
            logger.warning("Asked for a move while %s is to play", side_to_move(board).value)
            return None

        self._sync(board)
        if self.use_pruning:
            self.tree.generate_min_max_alpha_beta_pruning()
        elif not self._searched:
            self.tree.generate_min_max()
            self._searched = True

        move = self.tree.get_move()
        if move is not None:
            self.tree.set_move(move, self.player)
        return move
