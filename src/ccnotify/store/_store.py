"""ConfigStore — load, validate, merge and persist Claude Code settings.json."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .. import paths
from ..errors import CCNotifyError, JsonParseError
from ..models.hook import STOP_EVENT
from ..validation import validate_settings
from ._files import FileSystem

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class ConfigStore:
    """Reads and writes one settings document per call; holds no cached state."""

    def __init__(self, fs: FileSystem, cwd: Path | None = None) -> None:
        self._fs = fs
        self._cwd = cwd

    def get_config_path(self, is_global: bool) -> Path:
        return paths.get_config_path(is_global, cwd=self._cwd)

    def load(self, path: Path) -> Document:
        """Return the parsed document, or ``{}`` when the file does not exist."""
        path = Path(path)
        if not self._fs.exists(path):
            logger.debug("No settings file at %s, starting from an empty document", path)
            return {}

        try:
            text = self._fs.read_text(path)
        except UnicodeDecodeError as e:
            raise JsonParseError(
                f"Configuration file is not valid UTF-8: {path}: {e}",
                path=path,
                operation="load",
                suggestions=[f"Re-save {path.name} as UTF-8 or restore a backup"],
            ) from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise JsonParseError(
                f"Invalid JSON in configuration file: {path}: {e}",
                path=path,
                operation="load",
                suggestions=[f"Fix the syntax error or restore a backup next to {path.name}"],
            ) from e

        self._check(data, path)
        return data

    def save(self, path: Path, document: Document) -> Path | None:
        """Back up the current file (if any), then write ``document``.

        Returns the backup path, or None when there was nothing to back up.
        A failed write is rolled back from the backup; the write error is re-raised.
        """
        path = Path(path)
        self._check(document, path)
        content = json.dumps(document, indent=2, ensure_ascii=False) + "\n"

        backup_path = self._fs.create_backup(path) if self._fs.exists(path) else None
        try:
            self._fs.write_text(path, content)
        except CCNotifyError:
            if backup_path is not None and self._fs.exists(backup_path):
                try:
                    self._fs.copy_file(backup_path, path)
                    logger.info("Restored %s from %s after failed write", path, backup_path)
                except CCNotifyError as restore_error:
                    logger.error("Failed to restore backup %s: %s", backup_path, restore_error)
            raise
        logger.debug("Wrote settings to %s", path)
        return backup_path

    def merge(self, existing: Document, updates: Document) -> Document:
        """Merge ``updates`` into a copy of ``existing``.

        Top-level keys from ``updates`` win. Under ``hooks``, Stop entries are
        merged by matcher (replaced in place, or appended); any other event
        name is replaced wholesale.
        """
        merged = copy.deepcopy(existing)

        for key, value in updates.items():
            if key != "hooks" or not isinstance(value, dict):
                merged[key] = _plain(value)
                continue

            hooks = merged.get("hooks")
            if not isinstance(hooks, dict):
                hooks = merged["hooks"] = {}

            for event, entries in value.items():
                if event == STOP_EVENT and isinstance(entries, list):
                    stop = hooks.setdefault(STOP_EVENT, [])
                    for entry in _plain(entries):
                        index = _index_of(stop, entry.get("matcher"))
                        if index is None:
                            stop.append(entry)
                        else:
                            stop[index] = entry
                else:
                    hooks[event] = _plain(entries)

        return merged

    def installed_matchers(self, document: Document, event: str = STOP_EVENT) -> list[str]:
        hooks = document.get("hooks")
        if not isinstance(hooks, dict):
            return []
        return [
            entry["matcher"]
            for entry in hooks.get(event) or []
            if isinstance(entry, dict) and isinstance(entry.get("matcher"), str)
        ]

    def _check(self, data: Any, path: Path) -> None:
        result = validate_settings(data)
        for issue in result.warnings:
            logger.warning("%s: %s", path, issue.message)
        if not result.valid:
            first = result.first_error
            raise JsonParseError(
                f"Invalid configuration in {path}: {first.message}",
                path=path,
                operation="validate",
            )


def _index_of(entries: list[Any], matcher: object) -> int | None:
    for i, entry in enumerate(entries):
        if isinstance(entry, dict) and entry.get("matcher") == matcher:
            return i
    return None


def _plain(value: Any) -> Any:
    """Deep-copy ``value`` turning pydantic models into JSON-ready dicts."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return copy.deepcopy(value)
