"""Tests for settings loading and validation."""

import json
import logging

import pytest

from cell import Cell
from errors import ConfigurationError
from settings import (Settings, build_arg_parser, configure_logging, load_settings,
                      settings_from_args)


def write_config(tmp_path, data):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return str(path)


class TestDefaults:
    def test_defaults(self):
        settings = load_settings()
        assert settings == Settings()
        assert settings.human is Cell.CROSS
        assert settings.engine_marker is Cell.CIRCLE
        assert not settings.use_pruning

    def test_derived_properties(self):
        settings = Settings(human_marker="O", search_mode="alpha-beta")
        assert settings.human is Cell.CIRCLE
        assert settings.engine_marker is Cell.CROSS
        assert settings.use_pruning


class TestLoading:
    def test_file_values(self, tmp_path):
        path = write_config(tmp_path, {"human_marker": "o", "search_mode": "alpha-beta"})
        settings = load_settings(path)
        assert settings.human_marker == "O"
        assert settings.use_pruning

    def test_overrides_win_over_file(self, tmp_path):
        path = write_config(tmp_path, {"search_mode": "alpha-beta", "log_level": "info"})
        settings = load_settings(path, search_mode="minimax", log_level=None)
        assert settings.search_mode == "minimax"
        assert settings.log_level == "INFO"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_settings(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = write_config(tmp_path, "{not json")
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings(path)
        assert excinfo.value.context["path"] == path

    def test_non_object_json(self, tmp_path):
        path = write_config(tmp_path, [1, 2])
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_unknown_key(self, tmp_path):
        path = write_config(tmp_path, {"board_size": 4})
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings(path)
        assert excinfo.value.context["keys"] == ["board_size"]

    @pytest.mark.parametrize("overrides", [
        {"human_marker": "Z"},
        {"search_mode": "mcts"},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigurationError):
            load_settings(**overrides)

    def test_error_serializes(self):
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings(search_mode="mcts")
        data = excinfo.value.to_dict()
        assert data["code"] == "CONFIGURATION_ERROR"
        assert data["context"] == {"search_mode": "mcts"}
        assert str(excinfo.value).startswith("[CONFIGURATION_ERROR]")


class TestArguments:
    def test_parser_to_settings(self, tmp_path):
        parser = build_arg_parser("test")
        args = parser.parse_args(["--marker", "o", "--search", "alpha-beta",
                                  "--log-level", "debug", "--data-dir", str(tmp_path)])
        settings = settings_from_args(args)
        assert settings.human is Cell.CIRCLE
        assert settings.use_pruning
        assert settings.log_level == "DEBUG"
        assert settings.data_dir == str(tmp_path)

    def test_parser_defaults(self):
        args = build_arg_parser("test").parse_args([])
        assert settings_from_args(args) == Settings()

    def test_parser_rejects_bad_choice(self):
        with pytest.raises(SystemExit):
            build_arg_parser("test").parse_args(["--search", "random"])

    def test_configure_logging(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging(Settings(log_level="DEBUG"))
        assert calls["level"] == logging.DEBUG

    def test_configure_logging_reports_effective_settings(self, monkeypatch, caplog):
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
        caplog.set_level(logging.DEBUG, logger="settings")
        settings = Settings(search_mode="alpha-beta", log_level="DEBUG")
        configure_logging(settings)
        assert "Effective settings" in caplog.text
        assert "'search_mode': 'alpha-beta'" in caplog.text

    def test_to_dict(self):
        assert Settings().to_dict() == {"human_marker": "X", "search_mode": "minimax",
                                        "log_level": "WARNING", "data_dir": "data"}

    @pytest.mark.parametrize("human_marker,search_mode,slow", [
        ("O", "minimax", True),
        ("X", "minimax", False),
        ("O", "alpha-beta", False),
    ])
    def test_slow_first_move(self, human_marker, search_mode, slow):
        assert Settings(human_marker=human_marker, search_mode=search_mode).slow_first_move is slow
