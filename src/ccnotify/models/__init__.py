from .hook import STOP_EVENT, HookAction, HookMatcher
from .log import NotificationLogEntry, NotificationResult, NotificationType

__all__ = [
    "STOP_EVENT",
    "HookAction",
    "HookMatcher",
    "NotificationLogEntry",
    "NotificationResult",
    "NotificationType",
]
