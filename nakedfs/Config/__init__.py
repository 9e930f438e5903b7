"""
nakedfs Configuration Manager.

Settings come from, highest priority first:
1. Environment variables (a .env file is loaded into the environment by python-dotenv)
2. An optional JSON file (``json_path`` or NAKEDFS_CONFIG_FILE)
3. Schema defaults
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from dotenv import find_dotenv, load_dotenv

from nakedfs.shared.gate import GateLogger

from nakedfs.Config.schema import (
    CONFIG_SCHEMA,
    DEFAULT_LOCAL_BLOCK_SIZE,
    ConfigCategory,
    ConfigField,
    ConfigType,
    get_schema_by_key,
    schema_to_dict,
)

_log = GateLogger.get("Config")

CONFIG_JSON_ENV = "NAKEDFS_CONFIG_FILE"

PathArg = Optional[Union[str, Path]]


def _read_json(path: PathArg) -> Dict[str, Any]:
    """Read a JSON object from ``path``; anything unusable counts as empty."""
    if not path:
        return {}

    path = Path(path)
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        _log.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        _log.warning(f"Ignoring config file {path}: expected a JSON object")
        return {}
    return data


class ConfigManager:
    """
    Resolved nakedfs settings.

    Values are read once at construction; ``set`` changes this manager only.
    """

    def __init__(self, env_file: PathArg = None, json_path: PathArg = None):
        self._env_file = env_file
        self._json_path = json_path
        self._values: Dict[str, Any] = {}
        self._load()

    def _load(self):
        env_file = self._env_file or find_dotenv(usecwd=True)
        if env_file:
            load_dotenv(env_file)

        json_config = _read_json(self._json_path or os.environ.get(CONFIG_JSON_ENV))

        for field in CONFIG_SCHEMA:
            self._values[field.key] = self._convert(self._raw_value(field, json_config), field)

    @staticmethod
    def _raw_value(field: ConfigField, json_config: Mapping[str, Any]) -> Any:
        raw = os.environ.get(field.env_var)
        if raw is None:
            raw = json_config.get(field.key)
        return field.default if raw is None else raw

    def _convert(self, raw: Any, field: ConfigField) -> Any:
        try:
            return field.convert(raw)
        except (ValueError, TypeError):
            _log.warning(f"Invalid value for {field.key}: {raw!r}; using default {field.default!r}")
            return field.default

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting, or ``default`` when it is unset."""
        value = self._values.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> bool:
        """
        Override a setting on this manager.

        Args:
            key: Config key
            value: Raw or typed value

        Returns:
            False if the key is not part of the schema
        """
        field = get_schema_by_key(key)
        if field is None:
            return False

        self._values[key] = self._convert(value, field)
        return True

    def get_all(self) -> Dict[str, Any]:
        """Every setting, keyed by name."""
        return {field.key: self._values.get(field.key) for field in CONFIG_SCHEMA}

    def get_block_size(self) -> int:
        """NAKEDFS_LOCAL_BLOCK_SIZE, replaced by the default when not positive."""
        block_size = self.get("NAKEDFS_LOCAL_BLOCK_SIZE", DEFAULT_LOCAL_BLOCK_SIZE)
        if block_size > 0:
            return block_size

        _log.warning(
            f"NAKEDFS_LOCAL_BLOCK_SIZE must be positive, got {block_size}; "
            f"using {DEFAULT_LOCAL_BLOCK_SIZE}"
        )
        return DEFAULT_LOCAL_BLOCK_SIZE

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Check every setting against the schema.

        Returns:
            (is_valid, list of error messages)
        """
        errors = [
            problem
            for field in CONFIG_SCHEMA
            for problem in field.problems(self._values.get(field.key))
        ]
        return not errors, errors


_manager: Optional[ConfigManager] = None


def get_manager() -> ConfigManager:
    """The process-wide ConfigManager, created on first use."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def reload():
    """Re-read configuration from files and the environment."""
    global _manager
    _manager = ConfigManager()


def get(key: str, default: Any = None) -> Any:
    """Get a setting from the process-wide manager."""
    return get_manager().get(key, default)


__all__ = [
    "ConfigManager",
    "ConfigField",
    "ConfigType",
    "ConfigCategory",
    "CONFIG_SCHEMA",
    "DEFAULT_LOCAL_BLOCK_SIZE",
    "get_manager",
    "reload",
    "get",
    "schema_to_dict",
]
