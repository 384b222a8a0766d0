"""Filesystem primitive: directories, UTF-8 text files and timestamped backups."""

from __future__ import annotations

import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path

from ..errors import CCNotifyError, ConfigBackupError, FilePermissionError, wrap_os_error

logger = logging.getLogger(__name__)

BACKUP_MARKER = ".backup."


def backup_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC instant with ':' and '.' replaced by '-' (filesystem-safe)."""
    now = now or datetime.now(timezone.utc)
    iso = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class FileSystem:
    """Local filesystem operations with errors mapped onto the ccnotify taxonomy.

    keep_backups: number of most recent backups retained per file after a new
    one is created; None keeps all of them.
    """

    def __init__(self, keep_backups: int | None = 1) -> None:
        self.keep_backups = keep_backups

    def ensure_directory(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise wrap_os_error(e, "create directory", Path(path), directory=True) from e

    def exists(self, path: Path) -> bool:
        try:
            return Path(path).exists()
        except OSError:
            return False

    def read_text(self, path: Path, errors: str = "strict") -> str:
        """Read UTF-8 text; undecodable bytes raise UnicodeDecodeError unless ``errors`` says otherwise."""
        try:
            return Path(path).read_text(encoding="utf-8", errors=errors)
        except OSError as e:
            raise wrap_os_error(e, "read file", Path(path)) from e

    def write_text(self, path: Path, content: str) -> None:
        """Write via a sibling temp file and rename over the target.

        Symlinks are followed, so the link target is updated and the link kept.
        An existing file keeps its permission bits.
        """
        path = Path(path).resolve()
        self.ensure_directory(path.parent)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(content, encoding="utf-8")
            if path.exists():
                shutil.copymode(path, tmp)
            tmp.replace(path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise wrap_os_error(e, "write file", path) from e

    def copy_file(self, source: Path, destination: Path) -> None:
        destination = Path(destination)
        self.ensure_directory(destination.parent)
        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise wrap_os_error(e, f"copy file from {source}", destination) from e

    def make_executable(self, path: Path) -> None:
        if os.name == "nt":
            return
        try:
            os.chmod(path, 0o755)
        except OSError as e:
            raise wrap_os_error(e, "make script executable", Path(path)) from e

    def create_backup(self, path: Path) -> Path:
        """Copy ``path`` to ``<path>.backup.<timestamp>`` and prune older backups."""
        path = Path(path)
        if not self.exists(path):
            raise FilePermissionError(
                f"Cannot backup non-existent file: {path}", path=path, operation="create backup"
            )
        backup_path = path.with_name(f"{path.name}{BACKUP_MARKER}{backup_timestamp()}")
        try:
            self.copy_file(path, backup_path)
        except CCNotifyError as e:
            raise ConfigBackupError(
                f"Failed to create backup of {path}: {e}", path=path, operation="create backup"
            ) from e
        logger.debug("Backed up %s to %s", path, backup_path)
        self._prune_backups(path)
        return backup_path

    def list_backups(self, path: Path) -> list[Path]:
        """Backups of ``path``, newest first."""
        path = Path(path)
        prefix = f"{path.name}{BACKUP_MARKER}"
        try:
            names = [p.name for p in path.parent.iterdir() if p.name.startswith(prefix)]
        except OSError:
            return []
        return [path.parent / name for name in sorted(names, reverse=True)]

    def _prune_backups(self, path: Path) -> None:
        if self.keep_backups is None:
            return
        for old in self.list_backups(path)[self.keep_backups :]:
            try:
                old.unlink()
            except OSError as e:
                logger.warning("Failed to remove old backup file %s: %s", old, e)
