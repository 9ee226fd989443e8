"""
Utility functions for cluster-completion.
"""

import os
from pathlib import Path

APP_DIR_NAME = "cluster-completion"


def get_state_dir() -> str:
    """
    Get the directory used for log files.

    Honours ``XDG_STATE_HOME`` and falls back to ``~/.local/state``.

    Returns:
        Absolute path to the state directory (created if missing)
    """
    base = os.getenv("XDG_STATE_HOME") or os.path.join(Path.home(), ".local", "state")
    path = os.path.join(base, APP_DIR_NAME)
    os.makedirs(path, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """
    Get the directory holding the optional JSON configuration file.

    Returns:
        Path to ``$XDG_CONFIG_HOME/cluster-completion`` (or ``~/.config/...``)
    """
    base = os.getenv("XDG_CONFIG_HOME") or os.path.join(Path.home(), ".config")
    return Path(base) / APP_DIR_NAME
