"""Configuration path helpers for bgdeps."""

import os
from pathlib import Path

CONFIG_ENV = "BGDEPS_CONFIG"


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/bgdeps"""
    return Path.home() / ".config" / "bgdeps"


def get_config_path() -> Path:
    """Return path to user config file.

    Priority:
    1. BGDEPS_CONFIG environment variable (if set)
    2. ~/.config/bgdeps/config.json (default XDG location)
    """
    if CONFIG_ENV in os.environ:
        return Path(os.environ[CONFIG_ENV])
    return get_config_dir() / "config.json"
