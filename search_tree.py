"""Game-tree search for tic-tac-toe.

The tree is built for one maximizing player. Even-depth nodes are that
player's turn to pick a child (max), odd-depth nodes are the opponent's
turn (min). A depth-0 root therefore expands into the maximizing player's
candidate moves.

Utilities are always from the maximizing player's point of view. Internal
nodes subtract their depth after taking the max and add it after taking the
min, so among equal outcomes the search prefers quicker wins and slower
losses.
"""
import logging

from cell import Cell
from errors import InvalidPlayerError, MoveNotInTreeError

logger = logging.getLogger(__name__)

UTILITY_MIN = -(2 ** 31)
UTILITY_MAX = 2 ** 31 - 1


class SearchNode:
    """One ply of the game tree: a board snapshot and its owned children."""

    __slots__ = ("board", "utility", "depth", "maximizing_player", "children")

    def __init__(self, board, depth, maximizing_player):
        self.board = board
        self.depth = depth
        self.maximizing_player = maximizing_player
        # Worst value for the side to move; overwritten by generation
        self.utility = UTILITY_MIN if self.is_maximizing() else UTILITY_MAX
        self.children = []

    def is_maximizing(self):
        return self.depth % 2 == 0

    def mover(self):
        """Marker placed when expanding this node."""
        if self.is_maximizing():
            return self.maximizing_player
        return self.maximizing_player.opposite()

    def populate(self):
        if self.board.is_won() is not None:
            return

        marker = self.mover()
        for move in self.board.get_possible_moves():
            board = self.board.copy()
            board.set_move(move, marker)
            self.children.append(SearchNode(board, self.depth + 1, self.maximizing_player))

    def _leaf_utility(self):
        return self.board.evaluate(self.maximizing_player)

    def _depth_shift(self):
        return -self.depth if self.is_maximizing() else self.depth

    def generate_min_max(self):
        self.children = []
        self.populate()
        for child in self.children:
            child.generate_min_max()

        if not self.children:
            self.utility = self._leaf_utility()
            return

        utilities = [child.utility for child in self.children]
        if self.is_maximizing():
            self.utility = max(utilities) + self._depth_shift()
        else:
            self.utility = min(utilities) + self._depth_shift()

    def generate_min_max_alpha_beta_pruning(self, alpha=UTILITY_MIN, beta=UTILITY_MAX):
        """Alpha-beta variant of generate_min_max.

        Yields the same utility as the full search whenever that utility lies
        inside (alpha, beta). Children are created eagerly; a cut-off only
        skips recursing into the remaining ones, which keep their sentinel
        utility and have no children of their own.
        """
        self.children = []
        self.populate()
        if not self.children:
            self.utility = self._leaf_utility()
            return

        # Children report utilities before this node's depth shift is applied,
        # so move the window into that frame.
        shift = self._depth_shift()
        alpha -= shift
        beta -= shift

        if self.is_maximizing():
            value = UTILITY_MIN
            for child in self.children:
                child.generate_min_max_alpha_beta_pruning(alpha, beta)
                value = max(value, child.utility)
                alpha = max(alpha, value)
                if value >= beta:
                    break
        else:
            value = UTILITY_MAX
            for child in self.children:
                child.generate_min_max_alpha_beta_pruning(alpha, beta)
                value = min(value, child.utility)
                beta = min(beta, value)
                if value <= alpha:
                    break
        self.utility = value + shift

    def count(self):
        """Number of nodes in this subtree, this one included."""
        return 1 + sum(child.count() for child in self.children)

    def __repr__(self):
        return (f"SearchNode(depth={self.depth}, utility={self.utility}, "
                f"children={len(self.children)})")


class SearchTree:
    """Owns the root SearchNode and re-roots it as moves are committed."""

    def __init__(self, board, maximizing_player):
        if maximizing_player is Cell.EMPTY:
            raise InvalidPlayerError("Search tree needs a player to maximize for")
        self._root = SearchNode(board.copy(), 0, maximizing_player)
        self._root.utility = 0
        self._maximizing_player = maximizing_player

    @property
    def root(self):
        return self._root

    @property
    def board(self):
        return self._root.board

    @property
    def depth(self):
        return self._root.depth

    @property
    def maximizing_player(self):
        return self._maximizing_player

    @property
    def utility(self):
        return self._root.utility

    def node_count(self):
        return self._root.count()

    def generate_min_max(self):
        self._root.generate_min_max()
        self._log_generation("Minimax")

    def generate_min_max_alpha_beta_pruning(self, alpha=UTILITY_MIN, beta=UTILITY_MAX):
        self._root.generate_min_max_alpha_beta_pruning(alpha, beta)
        self._log_generation("Alpha-beta")

    def _log_generation(self, kind):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s from depth %d: utility %d, %d nodes",
                         kind, self._root.depth, self._root.utility, self.node_count())

    def get_move(self):
        """Best move for the maximizing player, or None when it is not their turn."""
        if not self._root.is_maximizing() or not self._root.children:
            return None

        # max() keeps the first of equal utilities
        best = max(self._root.children, key=lambda child: child.utility)
        move = self._root.board.get_one_difference(best.board)
        logger.debug("Best move %s with utility %d", move, best.utility)
        return move

    def set_move(self, pos, marker):
        """Re-root the tree on the child reached by playing ``marker`` at ``pos``."""
        target = self._root.board.copy()
        target.set_move(pos, marker)

        for child in self._root.children:
            if child.board == target:
                self._root = child
                logger.debug("Re-rooted at depth %d after %s plays %s",
                             child.depth, marker.value, tuple(pos))
                return

        raise MoveNotInTreeError(
            "Move not found in generated tree",
            context={"row": pos[0], "col": pos[1], "marker": marker.value,
                     "depth": self._root.depth},
        )
