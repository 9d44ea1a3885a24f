"""Shared constants for overbind."""

import os
from pathlib import Path

OVERBIND_VERSION = "0.3.0"

# Number of keys that make up the mash-trigger chord
MASH_TRIGGER_GROUP_SIZE = 3

CONFIG_FILENAME = "OverBind_conf.json"


def config_dir() -> Path:
    """Directory holding the bind config, following the XDG Base Directory spec."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config) / "overbind"


def state_dir() -> Path:
    """Directory for log files (XDG state dir)."""
    xdg_state = os.environ.get("XDG_STATE_HOME", str(Path.home() / ".local" / "state"))
    return Path(xdg_state) / "overbind"


def default_config_path() -> Path:
    return config_dir() / CONFIG_FILENAME
