from __future__ import annotations

from ._input import (
    MAX_INPUT_LENGTH,
    mask_webhook_url,
    sanitize_input,
    validate_title,
    validate_topic_name,
    validate_webhook_url,
)
from ._result import ValidationIssue, ValidationResult
from ._settings import validate_settings

__all__ = [
    "MAX_INPUT_LENGTH",
    "ValidationIssue",
    "ValidationResult",
    "mask_webhook_url",
    "sanitize_input",
    "validate_settings",
    "validate_title",
    "validate_topic_name",
    "validate_webhook_url",
]
