"""Reading and summarizing the notification log."""

from __future__ import annotations

from ._reader import DEFAULT_LIMIT, DEFAULT_MAX_ENTRIES, NotificationLog, NotificationStats, TypeStats

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_ENTRIES",
    "NotificationLog",
    "NotificationStats",
    "TypeStats",
]
