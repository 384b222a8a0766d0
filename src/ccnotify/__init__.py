"""ccnotify — install Claude Code Stop hooks that send Discord, ntfy and macOS notifications."""

from .errors import (
    CCNotifyError,
    CommandError,
    ConfigBackupError,
    DirectoryAccessError,
    FilePermissionError,
    InvalidInputError,
    InvalidTopicNameError,
    InvalidWebhookUrlError,
    JsonParseError,
    ScriptCreationError,
)
from .hooks import Channel, HookGenerator
from .logs import NotificationLog, NotificationStats
from .models import HookAction, HookMatcher, NotificationLogEntry
from .store import ConfigStore, FileSystem, HookInstaller, InstallResult, make_installer
from .validation import validate_settings, validate_topic_name, validate_webhook_url

__version__ = "0.1.0"

__all__ = [
    "CCNotifyError",
    "Channel",
    "CommandError",
    "ConfigBackupError",
    "ConfigStore",
    "DirectoryAccessError",
    "FilePermissionError",
    "FileSystem",
    "HookAction",
    "HookGenerator",
    "HookInstaller",
    "HookMatcher",
    "InstallResult",
    "InvalidInputError",
    "InvalidTopicNameError",
    "InvalidWebhookUrlError",
    "JsonParseError",
    "NotificationLog",
    "NotificationLogEntry",
    "NotificationStats",
    "ScriptCreationError",
    "__version__",
    "make_installer",
    "validate_settings",
    "validate_topic_name",
    "validate_webhook_url",
]
