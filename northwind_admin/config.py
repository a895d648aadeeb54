"""
Configuration settings for the Northwind admin dashboard
"""

import copy
import json
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from northwind_admin.errors import ConfigError
from simple_logger import LogLevel


DEFAULT_CONFIG = {
    "sqlite": {
        "db_path": "data/northwind.db",
    },
    "ui": {
        "per_page": 20,
        "max_visible_pages": 5,
        "date_format": "%Y-%m-%d",
    },
    "cache": {
        "stale_seconds": 300,
    },
    "logging": {
        "path": "logs/northwind_admin.log",
        "level": "INFO",
    },
}

CONFIG_FILE = os.path.expanduser("~/.northwind_admin_config.json")

# env var -> (section, key, type)
ENV_OVERRIDES = {
    "NORTHWIND_DB_PATH": ("sqlite", "db_path", str),
    "NORTHWIND_PER_PAGE": ("ui", "per_page", int),
    "NORTHWIND_MAX_VISIBLE_PAGES": ("ui", "max_visible_pages", int),
    "NORTHWIND_LOG_PATH": ("logging", "path", str),
    "NORTHWIND_LOG_LEVEL": ("logging", "level", str),
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _validate(config: Dict[str, Any]) -> None:
    for key in ("per_page", "max_visible_pages"):
        value = config["ui"].get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ConfigError(f"ui.{key} must be a positive integer, got {value!r}")
    stale = config["cache"].get("stale_seconds")
    if not isinstance(stale, (int, float)) or stale < 0:
        raise ConfigError(f"cache.stale_seconds must be >= 0, got {stale!r}")
    try:
        LogLevel.parse(config["logging"].get("level"))
    except ValueError as e:
        raise ConfigError(f"logging.level: {e}") from e


def load_config(path: Optional[str] = None, *, use_env: bool = True) -> Dict[str, Any]:
    """
    Load configuration from defaults, a JSON file and environment variables
    (in increasing order of precedence).

    Args:
        path: Explicit config file; defaults to ~/.northwind_admin_config.json
        use_env: Apply NORTHWIND_* environment overrides (a .env file is honoured)

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    config_file = path or CONFIG_FILE
    if os.path.exists(config_file):
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                _deep_merge(config, json.load(f))
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Error loading config file {config_file}: {e}") from e

    if use_env:
        load_dotenv()
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if not raw:
                continue
            try:
                config[section][key] = cast(raw)
            except ValueError as e:
                raise ConfigError(f"{env_name} is not a valid {cast.__name__}: {raw!r}") from e

    _validate(config)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Save configuration to file

    Raises:
        ConfigError: If the file cannot be written
    """
    try:
        with open(path or CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        raise ConfigError(f"Error saving config file: {e}") from e
