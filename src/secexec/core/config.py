"""User configuration file support (~/.secexec/config.toml)."""

from __future__ import annotations

import copy
import os
import sys
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from . import paths

LOG_LEVEL_ENV = "SECEXEC_LOG_LEVEL"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "info",
        "color": True,
    },
    "escape": {
        "platform": "auto",
    },
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict):
            # a section must stay a table; a scalar in its place is ignored
            if isinstance(value, dict):
                merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_user_config(path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load user configuration from TOML, layered over DEFAULT_CONFIG.

    A missing or unparsable file yields the defaults. SECEXEC_LOG_LEVEL,
    when set, overrides ``logging.level``.
    """
    config_file = path or paths.USER_CONFIG_FILE
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                config = _merge(config, tomllib.load(f))
        except (OSError, tomllib.TOMLDecodeError):
            pass

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        config["logging"]["level"] = env_level.strip().lower()
    return config


def get_config_value(key: str, default: Any = None, config: Optional[dict[str, Any]] = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'logging.level')."""
    value: Any = config if config is not None else load_user_config()
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def create_example_config() -> str:
    """Generate example config file content."""
    return '''# secexec configuration file
# Location: ~/.secexec/config.toml (override the directory with SECEXEC_HOME)

[logging]
# level = "info"        # error, warn, info, verbose, debug (env: SECEXEC_LOG_LEVEL)
# color = true          # colorize console output when writing to a terminal

[escape]
# platform = "auto"     # auto, posix, windows
'''


def write_example_config(path: Optional[Path] = None) -> bool:
    """
    Write the example config if no config file exists yet.

    Returns:
        True if a file was written, False if one was already present
    """
    config_file = path or paths.USER_CONFIG_FILE
    if config_file.exists():
        return False
    if path is None:
        paths.init_dirs()
    else:
        config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(create_example_config(), encoding="utf-8")
    try:
        os.chmod(config_file, 0o600)
    except OSError:
        pass
    return True
