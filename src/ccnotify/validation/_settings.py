from __future__ import annotations

from typing import Any

from ..models.hook import STOP_EVENT
from ._result import ValidationResult


def validate_settings(data: Any) -> ValidationResult:
    """Check the shape of a Claude Code settings document.

    Only the ``hooks`` substructure is inspected; every other key is opaque.
    Every event value must be an array; only Stop entries are checked further.
    """
    result = ValidationResult()

    if data is None:
        result.error("", "Configuration cannot be null")
        return result
    if not isinstance(data, dict):
        result.error("", "Configuration must be an object")
        return result
    if "hooks" not in data:
        return result

    hooks = data["hooks"]
    if not isinstance(hooks, dict):
        result.error("hooks", "hooks must be an object")
        return result

    for event, entries in hooks.items():
        prefix = f"hooks.{event}"
        if not isinstance(entries, list):
            result.error(prefix, f"{prefix} must be an array")
            continue
        if event != STOP_EVENT:
            continue
        seen: set[str] = set()
        for i, entry in enumerate(entries):
            _check_entry(result, entry, f"{prefix}[{i}]")
            matcher = entry.get("matcher") if isinstance(entry, dict) else None
            if isinstance(matcher, str):
                if matcher in seen:
                    result.warning(f"{prefix}[{i}].matcher", f"{prefix} has duplicate matcher '{matcher}'")
                seen.add(matcher)

    return result


def _check_entry(result: ValidationResult, entry: Any, path: str) -> None:
    if not isinstance(entry, dict):
        result.error(path, f"{path} must be an object")
        return

    if not isinstance(entry.get("matcher"), str):
        result.error(f"{path}.matcher", f"{path} must have a string matcher")

    actions = entry.get("hooks")
    if not isinstance(actions, list):
        result.error(f"{path}.hooks", f"{path} must have a hooks array")
        return

    for j, action in enumerate(actions):
        action_path = f"{path}.hooks[{j}]"
        if not isinstance(action, dict):
            result.error(action_path, f"{action_path} must be an object")
            continue
        if action.get("type") != "command":
            result.error(f"{action_path}.type", f"{action_path} must have type 'command'")
        if not isinstance(action.get("command"), str):
            result.error(f"{action_path}.command", f"{action_path} must have a string command")
