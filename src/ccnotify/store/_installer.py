"""HookInstaller — the validate, load, generate, merge, save pipeline per channel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .. import paths
from ..errors import CCNotifyError, CommandError, ScriptCreationError
from ..hooks import DEFAULT_MACOS_TITLE, Channel, HookGenerator
from ..models.hook import STOP_EVENT
from ..validation import mask_webhook_url, validate_title, validate_topic_name, validate_webhook_url
from ._files import FileSystem
from ._store import ConfigStore

logger = logging.getLogger(__name__)

NTFY_SCRIPT_NAME = "ntfy.sh"


@dataclass
class InstallResult:
    channel: Channel
    config_path: Path
    scope: str  # "global" or "local"
    display_value: str  # safe to print (webhook token masked)
    backup_path: Path | None = None
    script_path: Path | None = None


class HookInstaller:
    def __init__(
        self,
        fs: FileSystem,
        store: ConfigStore,
        generator: HookGenerator,
        data_dir: Path | None = None,
    ) -> None:
        self._fs = fs
        self._store = store
        self._generator = generator
        self._data_dir = data_dir

    @property
    def store(self) -> ConfigStore:
        return self._store

    def install(self, channel: Channel, value: str | None = None, is_global: bool = False) -> InstallResult:
        """Register (or update) the Stop hook for ``channel`` in settings.json.

        Running it twice for the same channel replaces the existing entry.
        """
        try:
            return self._install(channel, value, is_global)
        except CCNotifyError:
            raise
        except Exception as e:
            raise CommandError(f"Failed to create {channel.value} Stop Hook: {e}") from e

    def _install(self, channel: Channel, value: str | None, is_global: bool) -> InstallResult:
        value, display = self._validate(channel, value)

        config_path = self._store.get_config_path(is_global)
        self._fs.ensure_directory(config_path.parent)
        logger.debug("Loading %s", config_path)
        existing = self._store.load(config_path)

        hook = self._generator.generate(channel, value)
        updated = self._store.merge(existing, {"hooks": {STOP_EVENT: [hook]}})
        backup_path = self._store.save(config_path, updated)

        script_path = None
        if channel is Channel.NTFY:
            script_path = self._script_path(NTFY_SCRIPT_NAME)
            self.write_script(script_path, self._generator.ntfy_script(value or ""))

        scope = "global" if is_global else "local"
        logger.info("%s Stop Hook written to %s (%s)", channel.value, config_path, scope)
        return InstallResult(
            channel=channel,
            config_path=config_path,
            scope=scope,
            display_value=display,
            backup_path=backup_path,
            script_path=script_path,
        )

    def write_script(self, path: Path, content: str) -> None:
        """Write an executable script; a failed chmod is only logged."""
        try:
            self._fs.write_text(path, content)
        except CCNotifyError as e:
            raise ScriptCreationError(
                f"Failed to create script at {path}: {e}", path=path, operation="write script"
            ) from e
        try:
            self._fs.make_executable(path)
        except CCNotifyError as e:
            logger.warning("Failed to make script executable: %s", e)

    def _validate(self, channel: Channel, value: str | None) -> tuple[str | None, str]:
        if channel is Channel.DISCORD:
            url = validate_webhook_url(value)
            return url, mask_webhook_url(url)
        if channel is Channel.NTFY:
            topic = validate_topic_name(value)
            return topic, topic
        title = validate_title(value)
        return title, title or DEFAULT_MACOS_TITLE

    def _script_path(self, name: str) -> Path:
        if self._data_dir is not None:
            return self._data_dir / name
        return paths.get_script_path(name)
