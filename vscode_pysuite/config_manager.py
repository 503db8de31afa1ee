import copy
import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigError
from .logger import Logger

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "tree_walker": {
        "exclude_folders": [
            "out",
            "bin",
            "report",
            "results",
            "logs",
            "build",
            "__pycache__",
            "node_modules",
        ],
        "source_marker": ".py",
        "max_depth": 256,
    },
    "workspace": {
        "extension": ".code-workspace",
        "settings": {"python.analysis.extraPaths": []},
    },
    "env_file": {
        "name": ".env",
        "variable": "PYTHONPATH",
    },
}


class ConfigManager:
    """Builds the run configuration from defaults and an optional JSON overlay.

    Sections are exposed as attributes, e.g. ``cm.config.tree_walker.source_marker``.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self.logger = Logger("config_manager")
        self.config_path = Path(config_path) if config_path is not None else None

        data = copy.deepcopy(DEFAULT_CONFIG)
        if self.config_path is not None:
            self._merge(data, self._load(self.config_path))
        self.config = SimpleNamespace(
            **{section: SimpleNamespace(**values) for section, values in data.items()}
        )

    def _load(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                loaded = json.load(f)
        except OSError as exc:
            self.logger.error(f"Failed to read config file '{path}': {exc}")
            raise ConfigError(f"Unable to read config file: {path}") from exc
        except ValueError as exc:
            self.logger.error(f"Config file '{path}' is not valid JSON: {exc}")
            raise ConfigError(f"Invalid JSON in config file: {path}") from exc

        if not isinstance(loaded, dict):
            raise ConfigError("Config file must contain a JSON object at the top level.")
        self.logger.debug(f"Loaded config overlay from {path}")
        return loaded

    @staticmethod
    def _merge(data: Dict[str, Dict[str, Any]], overlay: Dict[str, Any]) -> None:
        for section, values in overlay.items():
            if section not in data:
                raise ConfigError(f"Unknown config section: {section}")
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' must be an object.")
            for key, value in values.items():
                if key not in data[section]:
                    raise ConfigError(f"Unknown config key: {section}.{key}")
                expected = type(data[section][key])
                if type(value) is not expected:
                    raise ConfigError(
                        f"Config key {section}.{key} must be of type {expected.__name__}, "
                        f"got {type(value).__name__}."
                    )
                if isinstance(value, list) and not all(isinstance(item, str) for item in value):
                    raise ConfigError(f"Config key {section}.{key} must be a list of strings.")
                data[section][key] = value
