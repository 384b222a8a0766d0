"""NotificationLog — read-only view over the JSON-lines log the hook scripts append to."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models.log import NotificationLogEntry, NotificationResult, NotificationType
from ..store import FileSystem

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_LIMIT = 50


@dataclass
class TypeStats:
    total: int = 0
    success: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of successful notifications; 0.0 when there are none."""
        return self.success / self.total * 100 if self.total else 0.0


@dataclass
class NotificationStats:
    """Counts per result and per channel type.

    Attributes:
        total: Number of entries considered.
        by_type: Per-channel totals; every NotificationType has an entry.
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    timeout: int = 0
    skipped: int = 0
    by_type: dict[NotificationType, TypeStats] = field(
        default_factory=lambda: {t: TypeStats() for t in NotificationType}
    )


class NotificationLog:
    """Entries are read from ``path`` on first access and cached.

    Only the last ``max_entries`` lines are kept; malformed lines are skipped.
    """

    def __init__(
        self,
        path: Path,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        fs: FileSystem | None = None,
    ) -> None:
        self.path = Path(path)
        self.max_entries = max_entries
        self._fs = fs or FileSystem()
        self._entries: list[NotificationLogEntry] | None = None

    def entries(self) -> list[NotificationLogEntry]:
        if self._entries is None:
            self._entries = self._load()
        return self._entries

    def recent(self, limit: int = DEFAULT_LIMIT) -> list[NotificationLogEntry]:
        """Last ``limit`` entries, oldest first."""
        return _tail(self.entries(), limit)

    def by_type(
        self, notification_type: NotificationType, limit: int = DEFAULT_LIMIT
    ) -> list[NotificationLogEntry]:
        return _tail([e for e in self.entries() if e.type == notification_type], limit)

    def failed(self, limit: int = DEFAULT_LIMIT) -> list[NotificationLogEntry]:
        return _tail([e for e in self.entries() if e.result == NotificationResult.FAILED], limit)

    def stats(self) -> NotificationStats:
        entries = self.entries()
        stats = NotificationStats(total=len(entries))
        for entry in entries:
            per_type = stats.by_type[entry.type]
            per_type.total += 1
            if entry.result == NotificationResult.SUCCESS:
                stats.success += 1
                per_type.success += 1
            elif entry.result == NotificationResult.FAILED:
                stats.failed += 1
                per_type.failed += 1
            elif entry.result == NotificationResult.TIMEOUT:
                stats.timeout += 1
            elif entry.result == NotificationResult.SKIPPED:
                stats.skipped += 1
        return stats

    def export(self, destination: Path) -> int:
        """Write all cached entries to ``destination`` as one JSON document.

        Returns the number of entries written.
        """
        entries = self.entries()
        payload: dict[str, Any] = {
            "exportTimestamp": _utc_now_iso(),
            "totalEntries": len(entries),
            "entries": [e.model_dump(mode="json", exclude_none=True) for e in entries],
        }
        self._fs.write_text(Path(destination), json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
        logger.info("Exported %d notification log entries to %s", len(entries), destination)
        return len(entries)

    def _load(self) -> list[NotificationLogEntry]:
        if not self._fs.exists(self.path):
            logger.debug("No notification log at %s", self.path)
            return []

        entries: list[NotificationLogEntry] = []
        text = self._fs.read_text(self.path, errors="replace")
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                entries.append(NotificationLogEntry.model_validate(json.loads(line)))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.debug("Skipping malformed log line %d in %s: %s", lineno, self.path, e)
        return entries[-self.max_entries :] if self.max_entries > 0 else []


def _tail(entries: list[NotificationLogEntry], limit: int) -> list[NotificationLogEntry]:
    return entries[-limit:] if limit > 0 else []


def _utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
