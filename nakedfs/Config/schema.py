"""
Configuration schema for nakedfs.

Each tunable is described once here: its type, default, and how a raw value
from the environment or a JSON file is checked and converted.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class ConfigType(Enum):
    """Configuration value types."""
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    PATH = "path"          # Native filesystem path
    URL = "url"


class ConfigCategory(Enum):
    """Groups of related settings."""
    FILESYSTEM = "filesystem"
    PLATFORM = "platform"
    LOGGING = "logging"


_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


@dataclass
class ConfigField:
    """One configurable setting."""
    key: str
    description: str
    config_type: ConfigType
    category: ConfigCategory
    required: bool = False
    default: Any = None
    env_var: Optional[str] = None      # Environment name; the key when unset
    validation: Optional[str] = None   # Regex the string form must match
    options: Optional[List[str]] = None

    def __post_init__(self):
        if self.env_var is None:
            self.env_var = self.key

    def convert(self, raw: Any) -> Any:
        """
        Convert a raw value to this field's type.

        Raises:
            ValueError: If the value cannot be converted
        """
        if raw is None:
            return None
        if self.config_type == ConfigType.INTEGER:
            if isinstance(raw, bool):
                raise ValueError(f"expected an integer, got {raw!r}")
            return int(raw)
        if self.config_type == ConfigType.BOOLEAN:
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if not text:
                return None
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
            raise ValueError(f"expected a boolean, got {raw!r}")
        return str(raw) if raw != "" else None

    def problems(self, value: Any) -> List[str]:
        """Describe what is wrong with an already converted value."""
        if value is None or value == "":
            return [f"Required config missing: {self.key}"] if self.required else []

        found = []
        if self.validation and not re.match(self.validation, str(value)):
            found.append(f"Invalid format for {self.key}")
        if self.options and value not in self.options:
            found.append(f"Invalid option for {self.key}: {value}")
        return found


# fs.local.block.size of the framework's own local filesystem
DEFAULT_LOCAL_BLOCK_SIZE = 32 * 1024 * 1024


# ==================== Schema Definition ====================

CONFIG_SCHEMA: List[ConfigField] = [
    # === Filesystem ===
    ConfigField(
        key="NAKEDFS_URI",
        description="URI identifying the local filesystem; statuses are qualified against it",
        config_type=ConfigType.URL,
        category=ConfigCategory.FILESYSTEM,
        default="file:///",
        validation=r"^[a-zA-Z][a-zA-Z0-9+.-]*:",
    ),
    ConfigField(
        key="NAKEDFS_LOCAL_BLOCK_SIZE",
        description="Default block size in bytes reported for every status",
        config_type=ConfigType.INTEGER,
        category=ConfigCategory.FILESYSTEM,
        default=DEFAULT_LOCAL_BLOCK_SIZE,
        validation=r"^[1-9][0-9]*$",
    ),
    ConfigField(
        key="NAKEDFS_WORKING_DIR",
        description="Working directory relative paths resolve against (default: process cwd)",
        config_type=ConfigType.PATH,
        category=ConfigCategory.FILESYSTEM,
    ),

    # === Platform ===
    ConfigField(
        key="NAKEDFS_WINDOWS",
        description="Treat owner/group names as domain-qualified Windows principals (default: detected)",
        config_type=ConfigType.BOOLEAN,
        category=ConfigCategory.PLATFORM,
    ),
    ConfigField(
        key="NAKEDFS_POSIX_ATTRIBUTES",
        description="Read and set POSIX permissions and ownership (default: detected)",
        config_type=ConfigType.BOOLEAN,
        category=ConfigCategory.PLATFORM,
    ),

    # === Logging ===
    ConfigField(
        key="NAKEDFS_LOG_LEVEL",
        description="Verbosity of the nakedfs loggers (default: left to the host, WARNING if unset)",
        config_type=ConfigType.STRING,
        category=ConfigCategory.LOGGING,
        options=["DEBUG", "INFO", "WARNING", "ERROR"],
    ),
]

_BY_KEY = {f.key: f for f in CONFIG_SCHEMA}


def get_schema_by_key(key: str) -> Optional[ConfigField]:
    """Look up a field by key."""
    return _BY_KEY.get(key)


def get_schema_by_category(category: ConfigCategory) -> List[ConfigField]:
    """All fields in a category, in schema order."""
    return [f for f in CONFIG_SCHEMA if f.category is category]


def schema_to_dict() -> dict:
    """Describe the schema as plain data."""
    return {
        f.key: {
            "description": f.description,
            "type": f.config_type.value,
            "category": f.category.value,
            "required": f.required,
            "default": f.default,
            "env_var": f.env_var,
            "options": f.options,
        }
        for f in CONFIG_SCHEMA
    }
