"""One notifier run: inspect the host, compose the report, deliver it."""

from __future__ import annotations

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor

from .config import Settings
from .inspectors import inspect_disks, inspect_scrub
from .notifications import NotificationOutcome, NotificationRequest, SlackChannel, notify

logger = logging.getLogger(__name__)


async def run(settings: Settings, channel: SlackChannel | None = None) -> NotificationOutcome:
    """Run every check once and send the report.

    InspectionError from either inspector propagates; nothing is sent then.
    Composition and delivery problems only show up in the returned outcome.
    """
    mount_points = list(settings.mount_points)
    logger.info("Target mount points: %s", mount_points)

    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor(max_workers=2) as executor:
        disk_future = loop.run_in_executor(executor, inspect_disks, mount_points)
        scrub_future = loop.run_in_executor(
            executor,
            functools.partial(inspect_scrub, mount_points, command=settings.btrfs_command),
        )
        capacities, scrub_results = await asyncio.gather(disk_future, scrub_future)

    logger.info("Target disk: %s", capacities)
    logger.info("btrfs scrub status: %s", scrub_results)

    request = NotificationRequest(
        capacities=tuple(capacities),
        scrub_results=tuple(scrub_results),
        alert_threshold_percent=settings.remaining_space_alert,
        destination_endpoint=settings.slack_webhook_url,
    )

    owns_channel = channel is None
    if channel is None:
        channel = SlackChannel()
    try:
        return await notify(request, channel)
    finally:
        if owns_channel:
            await channel.close()
