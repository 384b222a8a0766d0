"""CLI entry point for ccnotify."""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, paths
from ._logging import configure_logging, level_name
from .errors import CCNotifyError
from .hooks import Channel
from .logs import NotificationLog
from .models.log import NotificationLogEntry, NotificationType
from .store import HookInstaller, InstallResult, make_installer

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

_RESULT_STYLES = {
    "success": "green",
    "failed": "red",
    "timeout": "yellow",
    "skipped": "dim",
}

_DETAIL_LABELS = [
    ("error", "Error"),
    ("responseCode", "Response code"),
    ("executionTime", "Execution time"),
    ("webhookUrl", "Webhook"),
    ("topicName", "Topic"),
    ("title", "Title"),
]


def report_error(error: CCNotifyError) -> None:
    err_console.print(f"[red]Error:[/red] {escape(error.message)}")
    cause = error.__cause__
    if cause is not None and not isinstance(cause, CCNotifyError):
        err_console.print(f"   Details: {escape(str(cause))}")
    for suggestion in error.suggestions:
        err_console.print(f"   - {escape(suggestion)}")


def _reports_errors(f: Callable[..., Any]) -> Callable[..., Any]:
    """Print CCNotifyError like the rest of the CLI output and exit with its code."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except CCNotifyError as e:
            logger.debug("%s failed", f.__name__, exc_info=True)
            report_error(e)
            sys.exit(e.exit_code)

    return wrapper


def _global_option(f: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "-g",
        "--global",
        "is_global",
        is_flag=True,
        help="Write to ~/.claude/settings.json instead of ./.claude/settings.json",
    )(f)


@click.group()
@click.version_option(version=__version__, prog_name="ccnotify")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """ccnotify - Claude Code Stop Hooks for Discord, ntfy and macOS notifications."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)
    if "installer" not in ctx.obj:
        ctx.obj["installer"] = make_installer()


@main.command()
@click.argument("webhook_url")
@_global_option
@click.pass_obj
@_reports_errors
def discord(obj: dict[str, Any], webhook_url: str, is_global: bool) -> None:
    """Create Discord webhook notification Stop Hook."""
    result = _installer(obj).install(Channel.DISCORD, webhook_url, is_global=is_global)
    _print_installed(result, "Discord")
    console.print(f"Webhook URL: {escape(result.display_value)}")


@main.command()
@click.argument("topic_name")
@_global_option
@click.pass_obj
@_reports_errors
def ntfy(obj: dict[str, Any], topic_name: str, is_global: bool) -> None:
    """Create ntfy notification Stop Hook."""
    result = _installer(obj).install(Channel.NTFY, topic_name, is_global=is_global)
    _print_installed(result, "ntfy")
    if result.script_path is not None:
        console.print(f"Script: {escape(str(result.script_path))}")
    console.print(f"Topic: {escape(result.display_value)}")


@main.command()
@click.argument("title", required=False)
@_global_option
@click.pass_obj
@_reports_errors
def macos(obj: dict[str, Any], title: str | None, is_global: bool) -> None:
    """Create macOS notification Stop Hook."""
    result = _installer(obj).install(Channel.MACOS, title, is_global=is_global)
    _print_installed(result, "macOS")
    console.print(f"Title: {escape(result.display_value)}")


@main.command()
@click.option(
    "-t",
    "--type",
    "type_",
    type=click.Choice([t.value for t in NotificationType]),
    help="Filter by notification type",
)
@click.option("-f", "--failed", is_flag=True, help="Show only failed notifications")
@click.option("-l", "--limit", type=click.IntRange(min=1), default=50, show_default=True,
              help="Number of log entries to show")
@click.option("-s", "--stats", is_flag=True, help="Show notification statistics")
@click.option("-e", "--export", "export_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Export logs to a JSON file")
@_reports_errors
def logs(type_: str | None, failed: bool, limit: int, stats: bool, export_path: Path | None) -> None:
    """View notification logs and statistics."""
    log = NotificationLog(paths.get_notification_log_path())

    if export_path is not None:
        count = log.export(export_path)
        console.print(f"[green]Exported {count} log entries to:[/green] {escape(str(export_path))}")
        return

    if stats:
        _print_stats(log)
        return

    if failed:
        entries = log.failed(limit)
    elif type_:
        entries = log.by_type(NotificationType(type_), limit)
    else:
        entries = log.recent(limit)

    if not entries:
        console.print("No log entries found matching the criteria.")
        return
    _print_entries(entries)


@main.command()
@_global_option
@click.pass_obj
@_reports_errors
def config(obj: dict[str, Any], is_global: bool) -> None:
    """Show settings paths, log locations and installed ccnotify hooks."""
    store = _installer(obj).store
    config_path = store.get_config_path(is_global)

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    table.add_row("Settings file", f"{escape(str(config_path))} ({'global' if is_global else 'local'})")
    table.add_row("Data directory", escape(str(paths.get_data_dir())))
    table.add_row("Notification log", escape(str(paths.get_notification_log_path())))
    table.add_row("Log level", level_name(logging.getLogger("ccnotify").level))
    console.print(table)

    matchers = store.installed_matchers(store.load(config_path))
    ours = {c.matcher for c in Channel}
    if not matchers:
        console.print("No Stop hooks installed.")
        return
    console.print("Installed Stop hooks:")
    for matcher in matchers:
        suffix = "" if matcher in ours else " [dim](not managed by ccnotify)[/dim]"
        console.print(f"  {escape(matcher)}{suffix}")


def _installer(obj: dict[str, Any]) -> HookInstaller:
    return obj["installer"]


def _print_installed(result: InstallResult, label: str) -> None:
    console.print(f"[green]{label} Stop Hook created successfully![/green]")
    console.print(f"Configuration: {escape(str(result.config_path))} ({result.scope})")
    if result.backup_path is not None:
        console.print(f"Backup: {escape(str(result.backup_path))}")


def _print_stats(log: NotificationLog) -> None:
    stats = log.stats()
    summary = Table(title="Notification Statistics", show_header=False)
    summary.add_column("Result")
    summary.add_column("Count", justify="right")
    summary.add_row("Total", str(stats.total))
    summary.add_row("Successful", str(stats.success))
    summary.add_row("Failed", str(stats.failed))
    summary.add_row("Timeout", str(stats.timeout))
    summary.add_row("Skipped", str(stats.skipped))
    console.print(summary)

    by_type = Table(title="By Type")
    by_type.add_column("Type")
    by_type.add_column("Total", justify="right")
    by_type.add_column("Success", justify="right")
    by_type.add_column("Failed", justify="right")
    by_type.add_column("Success rate", justify="right")
    for type_, per_type in stats.by_type.items():
        if per_type.total:
            by_type.add_row(
                type_.value,
                str(per_type.total),
                str(per_type.success),
                str(per_type.failed),
                f"{per_type.success_rate:.1f}%",
            )
    if by_type.row_count:
        console.print(by_type)


def _print_entries(entries: list[NotificationLogEntry]) -> None:
    console.print(f"Notification Logs ({len(entries)} entries):")
    # Newest first.
    for index, entry in enumerate(reversed(entries), start=1):
        style = _RESULT_STYLES.get(entry.result.value, "")
        console.print(
            f"\n{index}. [{style}]{entry.result.value}[/{style}] "
            f"{entry.type.value.upper()} {entry.level} - {escape(entry.timestamp)}"
        )
        console.print(f"   Message: {escape(entry.message)}")
        details = entry.details or {}
        for key, label in _DETAIL_LABELS:
            if details.get(key) not in (None, ""):
                suffix = "s" if key == "executionTime" else ""
                console.print(f"   {label}: {escape(str(details[key]))}{suffix}")


if __name__ == "__main__":
    main()
