"""Entry point for the nasubot disk / btrfs scrub notifier."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.panel import Panel

from nasubot import __version__
from nasubot.config import ConfigError, Settings, load_settings
from nasubot.inspectors import InspectionError
from nasubot.notifications import DeliveryError, NotificationOutcome, SlackChannel
from nasubot.orchestrator import run

console = Console()
err_console = Console(stderr=True)

PING_MESSAGE = "nasubot: webhook test message"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def _render_outcome(outcome: NotificationOutcome) -> Panel:
    def mark(ok: bool) -> str:
        return "[green]ok[/green]" if ok else "[red]failed[/red]"

    body = (
        f"General:   {mark(outcome.general_section_built)}\n"
        f"Low space: {mark(outcome.low_space_section_built)}\n"
        f"Scrub:     {mark(outcome.scrub_section_built)}\n"
        f"Delivered: {mark(outcome.delivered)}"
    )
    style = "green" if outcome.all_succeeded else "yellow"
    return Panel.fit(body, title="nasubot", border_style=style)


def run_check(settings: Settings) -> int:
    """Inspect, notify and report. Partial failures still exit 0."""
    try:
        outcome = asyncio.run(run(settings))
    except InspectionError as e:
        err_console.print(f"Failed to run: {e}")
        return 1

    console.print(_render_outcome(outcome))
    return 0


async def _ping(settings: Settings) -> bool:
    async with SlackChannel() as channel:
        return await channel.deliver(PING_MESSAGE, settings.slack_webhook_url)


def run_ping(settings: Settings) -> int:
    """Send a test message to the configured webhook."""
    try:
        delivered = asyncio.run(_ping(settings))
    except DeliveryError as e:
        err_console.print(f"Failed to send: {e}")
        return 1

    if not delivered:
        err_console.print("Failed to send: webhook did not accept the message")
        return 1
    console.print("[green]Test message delivered[/green]")
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="nasubot",
        description="Report disk space and btrfs scrub status to Slack",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-c", "--config-file-path", required=True, help="Config file path (JSON or YAML)",
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("check", help="Inspect mounts and send the report (default)")
    sub.add_parser("ping", help="Send a test message to the webhook")

    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config_file_path)
    except ConfigError as e:
        err_console.print(f"Failed to parse config: {e}")
        sys.exit(1)

    _configure_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "Config: mount_points=%s remaining_space_alert=%d%%",
        settings.mount_points, settings.remaining_space_alert,
    )

    if args.command == "ping":
        sys.exit(run_ping(settings))
    sys.exit(run_check(settings))


if __name__ == "__main__":
    main()
