"""Tests for the text front-end."""

import json

import pytest

import cli
from board import BoardState
from cell import Cell, Position
from errors import InvalidMoveError
from game import DRAW
from minimax_ai import MinimaxAI
from settings import Settings


def scripted_input(lines):
    """input() replacement that hands out ``lines`` in order."""
    remaining = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(remaining)
        except StopIteration:
            raise AssertionError("game asked for more input than scripted")
    return fake_input


ALL_CELLS = [f"{r} {c}" for r in range(1, 4) for c in range(1, 4)]


class TestParseMove:
    @pytest.mark.parametrize("text,expected", [
        ("1 1", Position(0, 0)),
        ("3 2", Position(2, 1)),
        ("2,3", Position(1, 2)),
        ("  3   3 ", Position(2, 2)),
    ])
    def test_valid(self, text, expected):
        assert cli.parse_move(text) == expected

    @pytest.mark.parametrize("text", ["", "1", "1 2 3", "a b", "0 1", "4 1", "1 -1"])
    def test_invalid(self, text):
        with pytest.raises(InvalidMoveError):
            cli.parse_move(text)


class TestRenderBoard:
    def test_labels_and_marks(self):
        text = cli.render_board(BoardState.from_rows(["X  ", " O ", "   "]))
        lines = text.splitlines()
        assert lines[0] == "    1   2   3"
        assert lines[1] == "1  X |   |   "
        assert lines[3] == "2    | O |   "
        assert len(lines) == 6


class TestPlay:
    @pytest.mark.parametrize("search_mode", ["minimax", "alpha-beta"])
    def test_human_cannot_beat_engine(self, search_mode):
        output = []
        settings = Settings(search_mode=search_mode)
        winner = cli.play(settings, input_fn=scripted_input(["oops"] + ALL_CELLS),
                          output=output.append)
        assert winner in (Cell.CIRCLE, DRAW)
        assert any(line.startswith("[Error]") for line in output)
        assert any(line.startswith("Computer plays:") for line in output)
        assert output[-1] in ("You lost", "It's a draw")

    def test_engine_opens_when_human_plays_circle(self):
        output = []
        settings = Settings(human_marker="O", search_mode="alpha-beta")
        winner = cli.play(settings, input_fn=scripted_input(ALL_CELLS), output=output.append)
        assert winner in (Cell.CROSS, DRAW)
        assert output[0].startswith("You are O, computer is X")
        assert output[2].startswith("Computer plays:")


class TestMain:
    def test_records_score(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli, "play", lambda settings: DRAW)
        assert cli.main(["--data-dir", str(tmp_path)]) == 0
        scores = json.loads((tmp_path / "scores.json").read_text())
        assert scores == {"X": 0, "O": 0, "Draw": 1}
        assert "Draws 1" in capsys.readouterr().out

    def test_abandoned_game(self, tmp_path, monkeypatch):
        def quit_game(settings):
            raise EOFError
        monkeypatch.setattr(cli, "play", quit_game)
        assert cli.main(["--data-dir", str(tmp_path)]) == 1
        assert not (tmp_path / "scores.json").exists()

    def test_bad_config_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.main(["--config", str(tmp_path / "missing.json")])


class TestSlowStartNotice:
    def test_shown_when_minimax_opens(self, monkeypatch):
        # Same game flow with a pruning engine so the test stays quick
        monkeypatch.setattr(cli, "MinimaxAI",
                            lambda player, use_pruning: MinimaxAI(player, use_pruning=True))
        output = []
        settings = Settings(human_marker="O", search_mode="minimax")
        cli.play(settings, input_fn=scripted_input(ALL_CELLS), output=output.append)
        assert output[1] == cli.SLOW_START_NOTICE

    def test_hidden_with_pruning(self):
        output = []
        settings = Settings(human_marker="O", search_mode="alpha-beta")
        cli.play(settings, input_fn=scripted_input(ALL_CELLS), output=output.append)
        assert cli.SLOW_START_NOTICE not in output
