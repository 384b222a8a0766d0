"""Sanitization and format checks for user-supplied channel values."""

from __future__ import annotations

import logging
import re

from ..errors import InvalidTopicNameError, InvalidWebhookUrlError

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 2048
MAX_TOPIC_LENGTH = 64

# Control characters except tab (0x09), newline (0x0A) and carriage return (0x0D).
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")

# discord.com and discordapp.com only; no extra segments, query or fragment.
_WEBHOOK_URL = re.compile(r"https://discord(?:app)?\.com/api/webhooks/\d+/[\w-]+", re.ASCII)

_TOPIC_NAME = re.compile(r"[A-Za-z0-9_-]{1,64}")

_TOKEN_SEGMENT = re.compile(r"/[\w-]+$", re.ASCII)


def sanitize_input(raw: object) -> str:
    """Strip control characters and surrounding whitespace, cap the length.

    Non-string input sanitizes to an empty string.
    """
    if not isinstance(raw, str) or not raw:
        return ""
    sanitized = _CONTROL_CHARS.sub("", raw).strip()
    return sanitized[:MAX_INPUT_LENGTH]


def mask_webhook_url(url: str) -> str:
    """Hide the webhook token (last path segment) for display and logs."""
    return _TOKEN_SEGMENT.sub("/***", url)


def validate_webhook_url(raw: object) -> str:
    """Return the sanitized webhook URL or raise InvalidWebhookUrlError."""
    url = sanitize_input(raw)
    if not url:
        raise InvalidWebhookUrlError(
            "Discord webhook URL is required and must be a string",
            suggestions=["Copy the webhook URL from Server Settings > Integrations > Webhooks"],
        )
    if not _WEBHOOK_URL.fullmatch(url):
        logger.debug("Rejected webhook URL %s", mask_webhook_url(url))
        raise InvalidWebhookUrlError(
            "Invalid Discord webhook URL format. "
            "Expected format: https://discord.com/api/webhooks/{id}/{token}",
            value=mask_webhook_url(url),
            suggestions=[
                "The URL must start with https://discord.com/ or https://discordapp.com/",
                "Remove any query string or trailing path after the token",
            ],
        )
    return url


def validate_topic_name(raw: object) -> str:
    """Return the sanitized ntfy topic name or raise InvalidTopicNameError."""
    topic = sanitize_input(raw)
    if not topic:
        raise InvalidTopicNameError("ntfy topic name is required and must be a string")
    if not _TOPIC_NAME.fullmatch(topic):
        logger.debug("Rejected topic name %r (length %d)", topic, len(topic))
        raise InvalidTopicNameError(
            f"Invalid ntfy topic name. Must be 1-{MAX_TOPIC_LENGTH} characters long and "
            "contain only letters, numbers, hyphens, and underscores",
            value=topic,
            suggestions=["Example: my-claude-notifications"],
        )
    if topic[0] in "-_" or topic[-1] in "-_":
        raise InvalidTopicNameError(
            "ntfy topic name cannot start or end with hyphens or underscores",
            value=topic,
        )
    return topic


def validate_title(raw: object) -> str | None:
    """Sanitize an optional notification title; blank means "use the default"."""
    title = sanitize_input(raw)
    return title or None
