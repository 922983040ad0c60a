"""
Layered settings for moodmorph.

Three layers are merged, later ones winning:
    1. Built-in defaults (see ``Config.builtin_defaults``)
    2. A YAML or JSON file, usually ~/.moodmorph/config.yaml
    3. Environment variables: MOODMORPH_<SECTION>__<KEY>, e.g.
       MOODMORPH_UI__LANGUAGE=fa or MOODMORPH_STORAGE__COMPRESS=true

Environment values are read as YAML scalars, so numbers and booleans arrive
typed; anything else stays a string.

Usage:
    config = Config(config_file="~/.moodmorph/config.yaml")
    config.get("paths.store_dir")
    config.validated().ui.language
"""

import copy
import json
import os
from typing import Any

import yaml
from pydantic import ValidationError

from .config_schema import MoodMorphConfig
from .exceptions import ConfigurationError

ENV_PREFIX = "MOODMORPH_"
DEFAULT_DATA_DIR = os.path.join("~", ".moodmorph-data")


def _deep_merge(target: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value
    return target


def _read_config_file(path: str) -> dict[str, Any]:
    """Parse a .yaml/.yml/.json file into a mapping; other extensions are ignored."""
    suffix = os.path.splitext(path)[1].lower()
    if suffix not in (".yaml", ".yml", ".json"):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return data


def _scalar(raw: str) -> Any:
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return value if isinstance(value, (bool, int, float)) else raw


def _env_overrides(prefix: str) -> dict[str, Any]:
    """Nested overrides from ``<prefix>SECTION__KEY`` environment variables."""
    overrides: dict[str, Any] = {}
    if not prefix:
        return overrides
    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        *sections, leaf = name[len(prefix) :].lower().split("__")
        node = overrides
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = _scalar(raw)
    return overrides


class Config:
    """
    Merged view over defaults, a config file and the environment.

    Values are addressed with dot paths ("llm.model"). The typed getters
    raise ConfigurationError instead of returning a value of the wrong type.
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: YAML or JSON file. A missing file is not an error.
            env_prefix: Prefix for environment overrides; empty disables them.
            data_dir: Root for the store and logs. Defaults to ~/.moodmorph-data.
            defaults: Extra defaults layered over the built-in ones.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self.data_dir = os.path.expanduser(data_dir or DEFAULT_DATA_DIR)

        self.config_data = _deep_merge(self.builtin_defaults(self.data_dir), copy.deepcopy(defaults or {}))
        if self.config_file and os.path.isfile(self.config_file):
            _deep_merge(self.config_data, _read_config_file(self.config_file))
        _deep_merge(self.config_data, _env_overrides(self.env_prefix))

    @staticmethod
    def builtin_defaults(data_dir: str) -> dict[str, Any]:
        return {
            "paths": {
                "data_dir": data_dir,
                "store_dir": os.path.join(data_dir, "store"),
                "log_dir": os.path.join(data_dir, "logs"),
            },
            "llm": {
                "model": "gemini/gemini-2.5-flash",
                "fallback_model": "",
                "temperature": 0.7,
                "timeout": 60,
            },
            "storage": {"compress": False},
            "insights": {"max_entries": 20},
            "ui": {"language": "en"},
            "logging": {"level": "WARNING"},
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dot path such as "paths.store_dir"; ``default`` if any part is missing."""
        node: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key_path: str, value: Any) -> None:
        *sections, leaf = key_path.split(".")
        node = self.config_data
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value

    def validated(self) -> MoodMorphConfig:
        """
        Validate ``config_data`` against the schema.

        Raises:
            ConfigurationError: Listing every invalid value, by dot path.
        """
        try:
            return MoodMorphConfig.model_validate(self.config_data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from e

    def get_int(self, key_path: str, default: int) -> int:
        value = self.get(key_path, default)
        if isinstance(value, bool):
            raise ConfigurationError(f"Config value '{key_path}' must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Config value '{key_path}' must be an integer, got {value!r}") from e

    def get_float(self, key_path: str, default: float) -> float:
        value = self.get(key_path, default)
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Config value '{key_path}' must be a number, got {value!r}") from e

    def ensure_directories(self) -> None:
        """Create every directory under ``paths``."""
        for value in self.get("paths", {}).values():
            if isinstance(value, str):
                os.makedirs(os.path.expanduser(value), exist_ok=True)


_config_instance: Config | None = None


def get_config(
    config_file: str | None = None,
    env_prefix: str = ENV_PREFIX,
    data_dir: str | None = None,
) -> Config:
    """Process-wide Config, created on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_file=config_file, env_prefix=env_prefix, data_dir=data_dir)
    return _config_instance


def reset_config() -> None:
    global _config_instance
    _config_instance = None
