"""Notification aggregator: turns inspection results into one Slack message.

The message is built in four fixed stages:

1. general: capacity line per mount
2. low space: mounts whose used share crossed the alert threshold
3. scrub: raw `btrfs scrub status` output per mount, errors marked
4. delivery: a single POST to the webhook

Each stage fails on its own: a broken stage leaves its outcome flag False,
puts a short notice in the message instead of its section, and the next
stage still runs. `notify` never raises for these failures; the returned
NotificationOutcome is the record of what worked.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, Protocol

from ..inspectors.models import MountCapacity, ScrubResult

logger = logging.getLogger(__name__)

GENERAL_HEADER = "Disk space\n"
LOW_SPACE_HEADER = ":warning: Low remaining disks:\n"
SCRUB_HEADER = "btrfs scrub status:\n"
SCRUB_ALERT_MARKER = "⚠⚠⚠⚠"

GENERAL_FAILED = "Failed to make general section.\n"
LOW_SPACE_FAILED = "Failed to check disk space.\n"
SCRUB_FAILED = "Failed to check btrfs scrub.\n"


class Channel(Protocol):
    async def deliver(self, text: str, endpoint: str) -> bool: ...


# ── Models ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NotificationRequest:
    """Everything one notification cycle needs. Built once per run."""

    capacities: tuple[MountCapacity, ...]
    scrub_results: tuple[ScrubResult, ...]
    alert_threshold_percent: int
    destination_endpoint: str


@dataclass
class NotificationOutcome:
    """Which stages succeeded. Flags only ever go False → True."""

    general_section_built: bool = False
    low_space_section_built: bool = False
    scrub_section_built: bool = False
    delivered: bool = False

    @property
    def all_succeeded(self) -> bool:
        return (
            self.general_section_built
            and self.low_space_section_built
            and self.scrub_section_built
            and self.delivered
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Section builders ─────────────────────────────────────────────────────────


def make_general_section(capacities: Sequence[MountCapacity]) -> str:
    """Header plus ``<mount>: <avail> GB / <total> GB`` per mount (GiB, truncated)."""
    text = GENERAL_HEADER
    for c in capacities:
        text += f"{c.mount_point}: {c.available_gb} GB / {c.total_gb} GB\n"
    return text


def find_low_space_mounts(
    capacities: Sequence[MountCapacity],
    alert_threshold_percent: int,
) -> list[MountCapacity]:
    """Mounts with ``used% >= 100 - alert_threshold_percent``.

    Zero-sized mounts have no meaningful percentage and are skipped.
    """
    limit = 100.0 - alert_threshold_percent
    flagged: list[MountCapacity] = []
    for c in capacities:
        if c.total_bytes == 0:
            logger.warning("Skipping low-space check for zero-sized mount %s", c.mount_point)
            continue
        if c.used_percent >= limit:
            flagged.append(c)
    return flagged


def make_low_space_section(
    capacities: Sequence[MountCapacity],
    alert_threshold_percent: int,
) -> str:
    """Warning block for low-space mounts, or "" when none are flagged."""
    flagged = find_low_space_mounts(capacities, alert_threshold_percent)
    if not flagged:
        return ""
    text = LOW_SPACE_HEADER
    for c in flagged:
        text += f"{c.mount_point}\n"
    return text


def make_scrub_section(results: Sequence[ScrubResult]) -> str:
    text = SCRUB_HEADER
    for r in results:
        if r.is_error:
            text += SCRUB_ALERT_MARKER
        text += f"Mount point: {r.mount_point}\n{r.raw_message}\n"
    return text


# ── Pipeline ─────────────────────────────────────────────────────────────────


async def notify(request: NotificationRequest, channel: Channel) -> NotificationOutcome:
    """Compose the report from ``request`` and send it to its destination through ``channel``."""
    outcome = NotificationOutcome()
    message = ""

    try:
        message += make_general_section(request.capacities) + "\n"
        outcome.general_section_built = True
    except Exception:
        logger.exception("Failed to make general section")
        message += GENERAL_FAILED

    try:
        message += make_low_space_section(
            request.capacities, request.alert_threshold_percent,
        )
        outcome.low_space_section_built = True
    except Exception:
        logger.exception("Failed to check disk space")
        message += LOW_SPACE_FAILED

    try:
        message += make_scrub_section(request.scrub_results)
        outcome.scrub_section_built = True
    except Exception:
        logger.exception("Failed to check btrfs scrub")
        message += SCRUB_FAILED

    try:
        outcome.delivered = await channel.deliver(message, request.destination_endpoint)
    except Exception:
        logger.exception("Failed to send to slack")

    logger.info("Notification outcome: %s", outcome.to_dict())
    return outcome
