import pytest

from ccnotify.hooks import DEFAULT_MACOS_TITLE, Channel, HookGenerator
from ccnotify.hooks._templates import bash_double_quoted, render
from ccnotify.models import HookMatcher

WEBHOOK = "https://discord.com/api/webhooks/123456789/abcDEF123"


@pytest.fixture
def generator():
    return HookGenerator()


@pytest.mark.parametrize(
    ("channel", "matcher"),
    [
        (Channel.DISCORD, "discord-notification"),
        (Channel.NTFY, "ntfy-notification"),
        (Channel.MACOS, "macos-notification"),
    ],
)
def test_channel_matchers(channel, matcher):
    assert channel.matcher == matcher


def test_discord_hook(generator):
    hook = generator.discord_hook(WEBHOOK)
    assert isinstance(hook, HookMatcher)
    assert hook.matcher == "discord-notification"
    assert len(hook.hooks) == 1
    assert hook.hooks[0].type == "command"
    command = hook.hooks[0].command
    assert command.startswith("#!/bin/bash\n")
    assert f'"{WEBHOOK}"' in command
    assert "https://discord.com/api/webhooks/123456789/***" in command
    assert "--max-time 30" in command
    assert '"$HTTP_CODE" = "204"' in command
    assert '"type":"discord"' in command


def test_discord_script_has_no_unfilled_placeholders(generator):
    for script in (
        generator.discord_script(WEBHOOK),
        generator.ntfy_command_script("topic"),
        generator.macos_script(),
        generator.ntfy_script("topic"),
    ):
        assert "@@" not in script
        assert script.endswith("\n")


def test_ntfy_hook(generator):
    hook = generator.ntfy_hook("my-topic")
    command = hook.hooks[0].command
    assert hook.matcher == "ntfy-notification"
    assert 'DEFAULT_TOPIC_NAME="my-topic"' in command
    assert 'TOPIC_NAME="${NTFY_TOPIC:-$DEFAULT_TOPIC_NAME}"' in command
    assert '"ntfy.sh/${TOPIC_NAME}"' in command
    assert '"$HTTP_CODE" = "200"' in command


def test_macos_hook_default_title(generator):
    command = generator.macos_hook().hooks[0].command
    assert f'MAIN_TITLE="{DEFAULT_MACOS_TITLE}"' in command
    assert "osascript -e" in command
    assert "afplay" in command


def test_macos_title_is_escaped(generator):
    command = generator.macos_hook('Say "hi" $HOME `x`').hooks[0].command
    assert r'MAIN_TITLE="Say \"hi\" \$HOME \`x\`"' in command


def test_generate_dispatches_by_channel(generator):
    assert generator.generate(Channel.DISCORD, WEBHOOK).matcher == "discord-notification"
    assert generator.generate(Channel.NTFY, "t").matcher == "ntfy-notification"
    assert generator.generate(Channel.MACOS).matcher == "macos-notification"


def test_generated_commands_differ_by_value(generator):
    assert generator.ntfy_hook("one").hooks[0].command != generator.ntfy_hook("two").hooks[0].command


def test_ntfy_standalone_script(generator):
    script = generator.ntfy_script("my-topic")
    assert script.startswith("#!/bin/bash\n")
    assert 'DEFAULT_TOPIC_NAME="my-topic"' in script
    assert "head -c 500" in script
    assert "tac \"$TRANSCRIPT\"" in script


def test_render_fills_placeholders():
    assert render("\n@@A@@ ${B}-@@B@@\n", A="x", B="y") == "x ${B}-y\n"


def test_render_missing_value():
    with pytest.raises(KeyError):
        render("@@MISSING@@")


def test_bash_double_quoted():
    assert bash_double_quoted('a"b\\c$d`e') == 'a\\"b\\\\c\\$d\\`e'
