"""Tests for FileSystem: writes, backups and error classification."""

import os
import stat
from datetime import datetime, timezone

import pytest

from ccnotify.errors import ConfigBackupError, DirectoryAccessError, FilePermissionError
from ccnotify.store import FileSystem, backup_timestamp


def test_backup_timestamp_is_filesystem_safe():
    ts = backup_timestamp(datetime(2026, 10, 17, 12, 34, 56, 789000, tzinfo=timezone.utc))
    assert ts == "2026-10-17T12-34-56-789Z"


def test_write_creates_parents(tmp_path):
    fs = FileSystem()
    target = tmp_path / "a" / "b" / "settings.json"
    fs.write_text(target, "{}\n")
    assert target.read_text() == "{}\n"
    assert not (target.parent / "settings.json.tmp").exists()


def test_read_missing_raises_file_permission_error(tmp_path):
    with pytest.raises(FilePermissionError) as exc:
        FileSystem().read_text(tmp_path / "missing.json")
    assert exc.value.cause == "not found"
    assert exc.value.operation == "read file"


def test_exists(tmp_path):
    fs = FileSystem()
    assert not fs.exists(tmp_path / "nope")
    assert fs.exists(tmp_path)


def test_ensure_directory_through_a_file(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(DirectoryAccessError):
        FileSystem().ensure_directory(blocker / "sub")


def test_copy_file(tmp_path):
    src = tmp_path / "src.json"
    src.write_bytes(b'{"a": 1}')
    FileSystem().copy_file(src, tmp_path / "out" / "dst.json")
    assert (tmp_path / "out" / "dst.json").read_bytes() == b'{"a": 1}'


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_make_executable(tmp_path):
    script = tmp_path / "run.sh"
    script.write_text("#!/bin/bash\n")
    FileSystem().make_executable(script)
    assert stat.S_IMODE(script.stat().st_mode) == 0o755


def test_backup_missing_file(tmp_path):
    with pytest.raises(FilePermissionError, match="Cannot backup non-existent file"):
        FileSystem().create_backup(tmp_path / "settings.json")


def test_backup_copies_content(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text('{"model": "opus"}')
    backup = FileSystem().create_backup(settings)
    assert backup.name.startswith("settings.json.backup.")
    assert backup.read_text() == '{"model": "opus"}'
    assert settings.read_text() == '{"model": "opus"}'


def test_backup_keeps_only_latest_by_default(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{}")
    old = tmp_path / "settings.json.backup.2000-01-01T00-00-00-000Z"
    old.write_text("old")
    fs = FileSystem()
    newest = fs.create_backup(settings)
    assert fs.list_backups(settings) == [newest]
    assert not old.exists()


def test_backup_retention_none_keeps_all(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{}")
    old = tmp_path / "settings.json.backup.2000-01-01T00-00-00-000Z"
    old.write_text("old")
    fs = FileSystem(keep_backups=None)
    newest = fs.create_backup(settings)
    assert fs.list_backups(settings) == [newest, old]


def test_list_backups_ignores_other_files(tmp_path):
    settings = tmp_path / "settings.json"
    (tmp_path / "settings.local.json.backup.2001-01-01T00-00-00-000Z").write_text("x")
    (tmp_path / "settings.json.backup.2001-01-01T00-00-00-000Z").write_text("x")
    (tmp_path / "settings.json.backup.2002-01-01T00-00-00-000Z").write_text("x")
    names = [p.name for p in FileSystem().list_backups(settings)]
    assert names == [
        "settings.json.backup.2002-01-01T00-00-00-000Z",
        "settings.json.backup.2001-01-01T00-00-00-000Z",
    ]


def test_backup_copy_failure_is_config_backup_error(tmp_path, monkeypatch):
    settings = tmp_path / "settings.json"
    settings.write_text("{}")
    fs = FileSystem()

    def fail(source, destination):
        raise FilePermissionError("disk full", path=destination)

    monkeypatch.setattr(fs, "copy_file", fail)
    with pytest.raises(ConfigBackupError) as exc:
        fs.create_backup(settings)
    assert exc.value.exit_code == 5
    assert isinstance(exc.value.__cause__, FilePermissionError)


@pytest.mark.skipif(os.name == "nt", reason="symlinks")
def test_write_through_symlink_updates_link_target(tmp_path):
    real = tmp_path / "dotfiles" / "settings.json"
    real.parent.mkdir()
    real.write_text("{}")
    link = tmp_path / "settings.json"
    link.symlink_to(real)

    FileSystem().write_text(link, '{"model": "opus"}\n')
    assert link.is_symlink()
    assert real.read_text() == '{"model": "opus"}\n'


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_write_keeps_existing_mode(tmp_path):
    target = tmp_path / "settings.json"
    target.write_text("{}")
    target.chmod(0o600)
    FileSystem().write_text(target, '{"a": 1}\n')
    assert stat.S_IMODE(target.stat().st_mode) == 0o600


def test_read_undecodable_bytes(tmp_path):
    target = tmp_path / "log.jsonl"
    target.write_bytes(b"ok \xff\n")
    fs = FileSystem()
    with pytest.raises(UnicodeDecodeError):
        fs.read_text(target)
    assert fs.read_text(target, errors="replace") == "ok �\n"
