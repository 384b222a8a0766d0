"""Models for the JSON-lines notification log written by the generated scripts."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class NotificationType(str, Enum):
    DISCORD = "discord"
    NTFY = "ntfy"
    MACOS = "macos"


class NotificationResult(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"
    SKIPPED = "skipped"


class NotificationLogEntry(BaseModel):
    """Single line of notifications.log.

    Lines written by older scripts have no ``result``; it is inferred from
    the message text.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    timestamp: str
    level: str
    type: NotificationType
    message: str
    result: NotificationResult = NotificationResult.SUCCESS
    details: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _infer_result(cls, data: object) -> object:
        if not isinstance(data, dict) or data.get("result"):
            return data
        message = str(data.get("message", ""))
        if "sent successfully" in message:
            result = NotificationResult.SUCCESS
        elif "failed" in message:
            result = NotificationResult.FAILED
        elif "timed out" in message:
            result = NotificationResult.TIMEOUT
        elif "skipped" in message:
            result = NotificationResult.SKIPPED
        else:
            result = NotificationResult.SUCCESS
        return {**data, "result": result}
