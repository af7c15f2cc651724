"""Game and engine settings.

Settings come from built-in defaults, an optional JSON file and command-line
overrides, in that order.
"""
import argparse
import json
import logging
import os
from dataclasses import asdict, dataclass, fields

from cell import Cell
from errors import ConfigurationError

logger = logging.getLogger(__name__)

SEARCH_MODES = ("minimax", "alpha-beta")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    human_marker: str = "X"
    search_mode: str = "minimax"
    log_level: str = "WARNING"
    data_dir: str = "data"

    @property
    def human(self):
        return Cell(self.human_marker)

    @property
    def engine_marker(self):
        return self.human.opposite()

    @property
    def use_pruning(self):
        return self.search_mode == "alpha-beta"

    @property
    def slow_first_move(self):
        """Plain minimax opening as X has to build the whole game tree first."""
        return not self.use_pruning and self.engine_marker is Cell.CROSS

    def validate(self):
        if self.human_marker not in ("X", "O"):
            raise ConfigurationError("human_marker must be 'X' or 'O'",
                                     context={"human_marker": self.human_marker})
        if self.search_mode not in SEARCH_MODES:
            raise ConfigurationError("Unknown search mode",
                                     context={"search_mode": self.search_mode})
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError("Unknown log level",
                                     context={"log_level": self.log_level})
        return self

    def to_dict(self):
        return asdict(self)


def _read_config(path):
    if not os.path.exists(path):
        raise ConfigurationError("Settings file not found", context={"path": path})
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Settings file is not valid JSON: {e}",
                                 context={"path": path}) from e
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must hold a JSON object",
                                 context={"path": path})
    return data


def load_settings(path=None, **overrides):
    """Build Settings from an optional JSON file plus keyword overrides.

    Overrides set to None are ignored so argparse namespaces can be passed
    straight through.
    """
    known = {f.name for f in fields(Settings)}
    values = {}
    if path:
        values.update(_read_config(path))

    unknown = set(values) - known
    if unknown:
        raise ConfigurationError("Unknown settings", context={"keys": sorted(unknown)})

    values.update({k: v for k, v in overrides.items() if k in known and v is not None})
    if "human_marker" in values:
        values["human_marker"] = str(values["human_marker"]).upper()
    if "log_level" in values:
        values["log_level"] = str(values["log_level"]).upper()
    return Settings(**values).validate()


def build_arg_parser(description):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--marker", dest="human_marker", choices=["X", "O", "x", "o"],
                        help="Marker played by the human (X moves first)")
    parser.add_argument("--search", dest="search_mode", choices=SEARCH_MODES,
                        help="Search algorithm used by the engine")
    parser.add_argument("--log-level", dest="log_level",
                        choices=LOG_LEVELS + tuple(level.lower() for level in LOG_LEVELS),
                        help="Logging verbosity")
    parser.add_argument("--data-dir", dest="data_dir",
                        help="Directory for the scoreboard file")
    return parser


def settings_from_args(args):
    return load_settings(args.config, human_marker=args.human_marker,
                         search_mode=args.search_mode, log_level=args.log_level,
                         data_dir=args.data_dir)


def configure_logging(settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Effective settings: %s", settings.to_dict())
