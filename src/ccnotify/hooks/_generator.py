from __future__ import annotations

from enum import Enum

from ..models.hook import HookAction, HookMatcher
from ..validation import mask_webhook_url
from . import _templates

DEFAULT_MACOS_TITLE = "Claude Code"


class Channel(str, Enum):
    DISCORD = "discord"
    NTFY = "ntfy"
    MACOS = "macos"

    @property
    def matcher(self) -> str:
        return f"{self.value}-notification"


class HookGenerator:
    """Builds the Stop hook entry (matcher + inline bash command) for each channel.

    Values are embedded verbatim; callers pass them through the validators first.
    """

    def generate(self, channel: Channel, value: str | None = None) -> HookMatcher:
        if channel is Channel.DISCORD:
            return self.discord_hook(value or "")
        if channel is Channel.NTFY:
            return self.ntfy_hook(value or "")
        return self.macos_hook(value)

    def discord_hook(self, webhook_url: str) -> HookMatcher:
        return _hook(Channel.DISCORD, self.discord_script(webhook_url))

    def ntfy_hook(self, topic_name: str) -> HookMatcher:
        return _hook(Channel.NTFY, self.ntfy_command_script(topic_name))

    def macos_hook(self, title: str | None = None) -> HookMatcher:
        return _hook(Channel.MACOS, self.macos_script(title))

    def discord_script(self, webhook_url: str) -> str:
        return _templates.render(
            _templates.PREAMBLE + _templates.LATEST_MESSAGES + _templates.DISCORD,
            DESCRIPTION="Send the latest Claude Code reply to a Discord webhook",
            TYPE=Channel.DISCORD.value,
            WEBHOOK_URL=webhook_url,
            MASKED_URL=mask_webhook_url(webhook_url),
        )

    def ntfy_command_script(self, topic_name: str) -> str:
        return _templates.render(
            _templates.PREAMBLE + _templates.LATEST_MESSAGES + _templates.NTFY,
            DESCRIPTION="Send the latest Claude Code reply to an ntfy topic",
            TYPE=Channel.NTFY.value,
            TOPIC=topic_name,
        )

    def macos_script(self, title: str | None = None) -> str:
        return _templates.render(
            _templates.PREAMBLE + _templates.LATEST_MESSAGES + _templates.MACOS,
            DESCRIPTION="Show the latest Claude Code reply as a macOS notification",
            TYPE=Channel.MACOS.value,
            TITLE=_templates.bash_double_quoted(title or DEFAULT_MACOS_TITLE),
        )

    def ntfy_script(self, topic_name: str) -> str:
        """Standalone ``ntfy.sh`` (500-character body) for manual use."""
        return _templates.render(
            _templates.NTFY_STANDALONE,
            TOPIC=topic_name,
            LATEST_MESSAGES=_templates.LATEST_MESSAGES.strip("\n"),
        )


def _hook(channel: Channel, command: str) -> HookMatcher:
    return HookMatcher(matcher=channel.matcher, hooks=[HookAction(command=command)])
