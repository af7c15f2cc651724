import json
import logging

from cell import Cell
from game import DRAW
from utils import get_scores_path

logger = logging.getLogger(__name__)


def _empty_scores():
    return {'X': 0, 'O': 0, 'Draw': 0}


class Scoreboard:
    """Win/draw tally kept in ``<data_dir>/scores.json`` between sessions."""

    def __init__(self, data_dir="data"):
        self.path = get_scores_path(data_dir)
        self.scores = _empty_scores()
        self.load()

    def load(self):
        try:
            with open(self.path, 'r') as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return self.scores
        except (OSError, json.JSONDecodeError) as e:
            # Corrupted file: start again from zero
            logger.warning("Ignoring unreadable scoreboard %s: %s", self.path, e)
            return self.scores

        scores = _empty_scores()
        if isinstance(loaded, dict):
            for key in scores:
                value = loaded.get(key, 0)
                if isinstance(value, int):
                    scores[key] = value
        self.scores = scores
        return self.scores

    def save(self):
        with open(self.path, 'w') as f:
            json.dump(self.scores, f)

    def record(self, winner):
        if winner == DRAW:
            self.scores['Draw'] += 1
        elif isinstance(winner, Cell) and winner is not Cell.EMPTY:
            self.scores[winner.value] += 1
        else:
            return
        self.save()
