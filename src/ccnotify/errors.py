from __future__ import annotations

import errno as _errno
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class CCNotifyError(Exception):
    """Base class for every error ccnotify reports to the command layer.

    Attributes:
        path: The file or directory involved, if applicable.
        operation: Short name of the operation that failed (e.g. "write file").
        suggestions: Hints printed after the error message by the CLI.
        exit_code: Process exit status used by the CLI for this kind of error.
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        operation: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.message = message
        self.path = path
        self.operation = operation
        self.suggestions = list(suggestions or [])
        super().__init__(message)


class InvalidInputError(CCNotifyError):
    """Raised when a user-supplied value fails its format check."""

    exit_code = 2

    def __init__(self, message: str, value: str = "", suggestions: list[str] | None = None) -> None:
        self.value = value
        super().__init__(message, suggestions=suggestions)


class InvalidWebhookUrlError(InvalidInputError):
    """Raised when a Discord webhook URL is malformed."""


class InvalidTopicNameError(InvalidInputError):
    """Raised when an ntfy topic name is malformed."""


class FilePermissionError(CCNotifyError):
    """Raised when reading, writing or copying a file fails at the OS level.

    Attributes:
        errno: The underlying OS error number, if any.
        cause: Human-readable classification (e.g. "permission denied", "disk full").
    """

    exit_code = 3

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        operation: str | None = None,
        errno: int | None = None,
        cause: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.errno = errno
        self.cause = cause
        super().__init__(message, path=path, operation=operation, suggestions=suggestions)


class JsonParseError(CCNotifyError):
    """Raised when the settings file is not valid JSON or has the wrong shape."""

    exit_code = 4


class ConfigBackupError(CCNotifyError):
    """Raised when a backup of the settings file cannot be created."""

    exit_code = 5


class DirectoryAccessError(FilePermissionError):
    """Raised when a required directory cannot be resolved or created."""

    exit_code = 6


class ScriptCreationError(CCNotifyError):
    """Raised when a generated script cannot be written to disk."""

    exit_code = 7


class CommandError(CCNotifyError):
    """Uncategorized failure while running a command."""

    exit_code = 1


_CAUSES: dict[int, str] = {
    _errno.ENOENT: "not found",
    _errno.EACCES: "permission denied",
    _errno.EPERM: "permission denied",
    _errno.ENOTDIR: "not a directory",
    _errno.EISDIR: "is a directory",
    _errno.ENOSPC: "no space left on device",
    _errno.EMFILE: "too many open files",
    _errno.ENFILE: "too many open files",
}

_SUGGESTIONS: dict[str, list[str]] = {
    "permission denied": [
        "Check the file and directory permissions",
        "Make sure the file is owned by the current user",
    ],
    "no space left on device": ["Free up disk space and try again"],
    "too many open files": ["Close other applications or raise the open file limit"],
    "not a directory": ["A path component exists but is a regular file"],
}


def wrap_os_error(
    error: OSError,
    operation: str,
    path: Path,
    directory: bool = False,
) -> FilePermissionError:
    """Convert an OSError into a ccnotify error with a classified cause.

    ENOTDIR (and any error when ``directory`` is set) becomes a
    DirectoryAccessError; everything else a FilePermissionError.
    """
    code = error.errno
    cause = _CAUSES.get(code) if code is not None else None
    if cause is None:
        name = _errno.errorcode.get(code, "unknown") if code is not None else "unknown"
        message = f"{operation} failed: {path} ({name})"
    elif cause == "too many open files":
        message = f"Failed to {operation}: too many open files"
    else:
        message = f"Failed to {operation}: {cause}: {path}"

    cls = DirectoryAccessError if directory or code == _errno.ENOTDIR else FilePermissionError
    return cls(
        message,
        path=path,
        operation=operation,
        errno=code,
        cause=cause,
        suggestions=_SUGGESTIONS.get(cause or "", []),
    )
