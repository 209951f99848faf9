"""
Hardware Info Configuration

Default locations of the device tree and the hardware database.

Configuration is loaded from (in order of precedence):
1. Environment variables (ER_HWINFO_DEVICE_TREE, ER_HWINFO_HWDB, ER_HWINFO_HWDB_SCHEMA)
2. User config file (~/.config/er-hwinfo/config.json)
3. System config file (/etc/er-hwinfo/config.json)
4. Default paths
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .detector import DEFAULT_DEVICE_TREE_PATH
from .logging import get_logger


SYSTEM_CONFIG_DIR = Path('/etc/er-hwinfo')

DEFAULT_HWDB_PATH = SYSTEM_CONFIG_DIR / 'hwdb.json'
DEFAULT_HWDB_SCHEMA_PATH = SYSTEM_CONFIG_DIR / 'hwdb-schema.json'

ENV_VARS = {
    'device_tree_path': 'ER_HWINFO_DEVICE_TREE',
    'hwdb_path': 'ER_HWINFO_HWDB',
    'hwdb_schema_path': 'ER_HWINFO_HWDB_SCHEMA',
}


def bundled_schema_path() -> Path:
    """Path of the hardware database schema shipped with the package."""
    return Path(__file__).parent / 'data' / 'hwdb-schema.json'


def _get_default_schema_path() -> Path:
    """Installed schema if present, otherwise the bundled one."""
    if DEFAULT_HWDB_SCHEMA_PATH.exists():
        return DEFAULT_HWDB_SCHEMA_PATH
    return bundled_schema_path()


@dataclass
class HwinfoConfig:
    """Configuration for hardware info queries."""

    # Root of the device tree holding the effective-range,hardware node
    device_tree_path: Path = DEFAULT_DEVICE_TREE_PATH

    # Hardware database JSON file
    hwdb_path: Path = DEFAULT_HWDB_PATH

    # JSON Schema the database is validated against
    hwdb_schema_path: Path = field(default_factory=_get_default_schema_path)

    def __post_init__(self):
        # Ensure paths are Path objects
        for name in ('device_tree_path', 'hwdb_path', 'hwdb_schema_path'):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, Path(value))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {key: str(value) for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HwinfoConfig':
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def _user_config_dir() -> Path:
    return Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config')) / 'er-hwinfo'


def _load_config_file(path: Path) -> Optional[Dict[str, Any]]:
    """Load configuration from a JSON file; unusable files are skipped."""
    if not path.exists():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        get_logger().warning(f"Ignoring config file {path}: {e}")
        return None
    if not isinstance(data, dict):
        get_logger().warning(f"Ignoring config file {path}: expected a JSON object")
        return None
    return data


def get_config() -> HwinfoConfig:
    """
    Get the hardware info configuration.

    Resolved on every call; nothing is cached.

    Returns:
        HwinfoConfig instance
    """
    config_data: Dict[str, Any] = {}

    # 1. System config, then user config
    for config_file in (SYSTEM_CONFIG_DIR / 'config.json', _user_config_dir() / 'config.json'):
        file_config = _load_config_file(config_file)
        if file_config:
            config_data.update(file_config)

    # 2. Environment variables (highest precedence)
    for key, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value:
            config_data[key] = value

    return HwinfoConfig.from_dict(config_data)
