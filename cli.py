"""Text front-end: play against the search engine in a terminal."""
import logging
import sys

from cell import Position
from errors import ConfigurationError, InvalidMoveError
from game import TicTacToe
from minimax_ai import MinimaxAI
from scoreboard import Scoreboard
from settings import build_arg_parser, configure_logging, settings_from_args

logger = logging.getLogger(__name__)

SLOW_START_NOTICE = ("Minimax builds the full game tree before its opening move; "
                     "this takes several seconds.")


def render_board(board):
    """Board with 1-based row/column labels."""
    lines = ["    1   2   3"]
    for i, row in enumerate(board.cells):
        lines.append(f"{i + 1} " + "|".join(f" {cell.value} " for cell in row))
        if i < 2:
            lines.append("  -----------")
    return "\n".join(lines)


def parse_move(text):
    """Parse "row col" (1-based, also "row,col") into a 0-based Position."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise InvalidMoveError("Enter a row and a column, e.g. '2 3'", context={"input": text})
    try:
        row, col = (int(part) for part in parts)
    except ValueError:
        raise InvalidMoveError("Row and column must be numbers", context={"input": text}) from None
    if not (1 <= row <= 3 and 1 <= col <= 3):
        raise InvalidMoveError("Row and column must be between 1 and 3", context={"input": text})
    return Position(row - 1, col - 1)


def play(settings, input_fn=input, output=print):
    """Run one human-vs-engine game and return the winner (a Cell or DRAW)."""
    human = settings.human
    game = TicTacToe()
    ai = MinimaxAI(player=settings.engine_marker, use_pruning=settings.use_pruning)

    output(f"You are {human.value}, computer is {ai.player.value}. X moves first.")
    if settings.slow_first_move:
        output(SLOW_START_NOTICE)
    output(render_board(game.board))

    while not game.is_game_over():
        if game.current_player is human:
            try:
                move = parse_move(input_fn("Your move (row col): "))
                game.make_move(move.row, move.col, strict=True)
            except InvalidMoveError as e:
                output(f"[Error] {e.message}")
                continue
        else:
            move = ai.best_move(game.board)
            game.make_move(move.row, move.col, strict=True)
            output(f"Computer plays: {move.row + 1} {move.col + 1}")
        output(render_board(game.board))

    logger.info("Game finished, winner: %s", game.winner)
    output(game.status_message(human))
    return game.winner


def main(argv=None):
    parser = build_arg_parser("Play tic-tac-toe against a minimax engine")
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    configure_logging(settings)
    scoreboard = Scoreboard(settings.data_dir)
    try:
        winner = play(settings)
    except (EOFError, KeyboardInterrupt):
        print("\nGame abandoned.")
        return 1

    scoreboard.record(winner)
    scores = scoreboard.scores
    print(f"Scores: X {scores['X']}  O {scores['O']}  Draws {scores['Draw']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
