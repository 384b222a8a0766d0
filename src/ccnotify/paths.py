"""Path resolution for settings files and the ccnotify data directory.

Honours ``XDG_DATA_HOME``; ``CCNOTIFY_LOG_FILE``
overrides the notification log location.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import DirectoryAccessError

CONFIG_DIR_NAME = ".claude"
CONFIG_FILE_NAME = "settings.json"
APP_NAME = "ccnotify"
NOTIFICATION_LOG_NAME = "notifications.log"


def get_home_directory() -> Path:
    """Return the user's home directory or raise DirectoryAccessError."""
    try:
        home = Path.home()
    except (KeyError, RuntimeError, OSError) as e:
        raise DirectoryAccessError(
            "Failed to get home directory", operation="get home directory"
        ) from e
    if not str(home) or str(home) == ".":
        raise DirectoryAccessError(
            "Unable to determine home directory", operation="get home directory"
        )
    return home


def get_config_directory(is_global: bool, cwd: Path | None = None) -> Path:
    if is_global:
        return get_home_directory() / CONFIG_DIR_NAME
    return (cwd or Path.cwd()) / CONFIG_DIR_NAME


def get_config_path(is_global: bool, cwd: Path | None = None) -> Path:
    """``<cwd>/.claude/settings.json`` or ``~/.claude/settings.json``."""
    return get_config_directory(is_global, cwd) / CONFIG_FILE_NAME


def get_xdg_data_home() -> Path:
    if xdg := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg)
    return get_home_directory() / ".local" / "share"


def get_data_dir() -> Path:
    """Per-user directory holding generated scripts and the notification log."""
    return get_xdg_data_home() / APP_NAME


def get_script_path(script_name: str) -> Path:
    return get_data_dir() / script_name


def get_notification_log_path() -> Path:
    if custom := os.environ.get("CCNOTIFY_LOG_FILE"):
        return Path(custom)
    return get_data_dir() / NOTIFICATION_LOG_NAME
