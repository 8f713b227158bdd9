"""Configuration loading for DocTracker.

Settings live in ``~/.config/doctracker/config.toml``. Missing keys fall back
to DEFAULT_CONFIG, so a partial (or absent) file is always usable.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "doctracker"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG: dict[str, Any] = {
    "user": {
        "id": "local",
        "name": "local",
        "is_admin": False,
    },
    "storage": {
        "db_path": str(CONFIG_DIR / "doctracker.db"),
    },
    "stats": {
        "default_range": "1w",
        "top_limit": 5,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    Args:
        config_path: Config file to read. Defaults to CONFIG_PATH.

    Returns:
        Configuration dictionary. Defaults are returned when the file is
        missing or cannot be parsed.
    """
    path = config_path or CONFIG_PATH
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        loaded = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def write_default_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration template.

    Returns:
        Path of the written file.
    """
    path = config_path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)
    return path


def get_db_path(config: dict[str, Any]) -> Path:
    """Database path from config, with ``~`` expanded."""
    return Path(config["storage"]["db_path"]).expanduser()
