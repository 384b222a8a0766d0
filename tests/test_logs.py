import json

import pytest

from ccnotify.logs import NotificationLog
from ccnotify.models import NotificationResult, NotificationType


def _line(type_, message, level="INFO", **extra):
    entry = {"timestamp": "2026-10-17T10:00:00.000Z", "level": level, "type": type_, "message": message}
    entry.update(extra)
    return json.dumps(entry)


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "notifications.log"
    lines = [
        _line("discord", "Starting discord notification"),
        _line("discord", "Discord notification sent successfully", details={"responseCode": 204}),
        _line("ntfy", "Ntfy notification failed", level="ERROR", details={"error": "HTTP 500"}),
        "not json at all",
        "",
        _line("macos", "macOS notification skipped", level="DEBUG"),
        _line("pager", "unknown channel"),
        _line("ntfy", "Ntfy notification sent successfully"),
        _line("macos", "macos notification timed out", level="WARN", result="timeout"),
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


def test_missing_log_is_empty(tmp_path):
    log = NotificationLog(tmp_path / "none.log")
    assert log.entries() == []
    assert log.stats().total == 0


def test_malformed_lines_skipped(log_file):
    entries = NotificationLog(log_file).entries()
    assert len(entries) == 6
    assert all(e.type in NotificationType for e in entries)


def test_recent_is_oldest_first(log_file):
    recent = NotificationLog(log_file).recent(2)
    assert [e.message for e in recent] == [
        "Ntfy notification sent successfully",
        "macos notification timed out",
    ]


def test_by_type(log_file):
    ntfy = NotificationLog(log_file).by_type(NotificationType.NTFY)
    assert [e.result for e in ntfy] == [NotificationResult.FAILED, NotificationResult.SUCCESS]


def test_failed(log_file):
    failed = NotificationLog(log_file).failed()
    assert len(failed) == 1
    assert failed[0].details == {"error": "HTTP 500"}


def test_max_entries_keeps_latest(log_file):
    log = NotificationLog(log_file, max_entries=2)
    assert [e.type for e in log.entries()] == [NotificationType.NTFY, NotificationType.MACOS]


def test_stats(log_file):
    stats = NotificationLog(log_file).stats()
    assert stats.total == 6
    assert stats.success == 3
    assert stats.failed == 1
    assert stats.skipped == 1
    assert stats.timeout == 1
    assert stats.by_type[NotificationType.DISCORD].total == 2
    assert stats.by_type[NotificationType.DISCORD].success_rate == 100.0
    assert stats.by_type[NotificationType.NTFY].success == 1
    assert stats.by_type[NotificationType.NTFY].failed == 1
    assert stats.by_type[NotificationType.NTFY].success_rate == 50.0
    assert stats.by_type[NotificationType.MACOS].total == 2
    assert stats.by_type[NotificationType.MACOS].success_rate == 0.0


def test_export(log_file, tmp_path):
    dest = tmp_path / "out" / "export.json"
    count = NotificationLog(log_file).export(dest)
    data = json.loads(dest.read_text())
    assert count == 6
    assert data["totalEntries"] == 6
    assert data["exportTimestamp"].endswith("Z")
    assert data["entries"][1]["result"] == "success"
    assert data["entries"][1]["details"] == {"responseCode": 204}


def test_undecodable_bytes_are_replaced(tmp_path):
    path = tmp_path / "notifications.log"
    good = _line("ntfy", "Ntfy notification sent successfully").encode()
    raw = (
        b'{"timestamp": "2026-10-17T10:00:00.000Z", "level": "ERROR", "type": "discord", '
        b'"message": "Discord notification failed", "details": {"responseBody": "bad \xff body"}}'
    )
    path.write_bytes(good + b"\n" + raw + b"\n" + b"\xfe\xff garbage\n" + good + b"\n")

    entries = NotificationLog(path).entries()
    assert [e.type for e in entries] == [NotificationType.NTFY, NotificationType.DISCORD, NotificationType.NTFY]
    assert entries[1].result == NotificationResult.FAILED
    assert entries[1].details == {"responseBody": "bad � body"}
