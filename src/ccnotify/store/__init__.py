"""Settings persistence and hook installation."""

from __future__ import annotations

from pathlib import Path

from ..hooks import HookGenerator
from ._files import FileSystem, backup_timestamp
from ._installer import HookInstaller, InstallResult
from ._store import ConfigStore, Document


def make_installer(
    cwd: Path | None = None,
    data_dir: Path | None = None,
    keep_backups: int | None = 1,
) -> HookInstaller:
    """Build a HookInstaller wired to the local filesystem.

    cwd: project directory for local settings; defaults to the process cwd
    data_dir: where generated scripts go; defaults to $XDG_DATA_HOME/ccnotify
    keep_backups: settings.json backups retained after each save (None keeps all)
    """
    fs = FileSystem(keep_backups=keep_backups)
    return HookInstaller(
        fs=fs,
        store=ConfigStore(fs, cwd=cwd),
        generator=HookGenerator(),
        data_dir=data_dir,
    )


__all__ = [
    "ConfigStore",
    "Document",
    "FileSystem",
    "HookInstaller",
    "InstallResult",
    "backup_timestamp",
    "make_installer",
]
