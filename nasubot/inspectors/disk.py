"""Disk inspector: reads capacity of the configured mount points via psutil."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import psutil

from .models import InspectionError, MountCapacity

logger = logging.getLogger(__name__)


def inspect_disks(mount_points: Iterable[str]) -> list[MountCapacity]:
    """Return capacity for every live mount whose path is in ``mount_points``.

    Paths are compared as plain strings (no normalisation, no symlink
    resolution). Requested paths that are not currently mounted are left out
    of the result. Results follow the order of the host mount table.
    """
    wanted = set(mount_points)

    try:
        partitions = psutil.disk_partitions(all=True)
    except OSError as e:
        raise InspectionError(f"Failed to read mount table: {e}") from e

    rows: list[MountCapacity] = []
    seen: set[str] = set()
    for p in partitions:
        mp = str(p.mountpoint)
        if mp not in wanted or mp in seen:
            continue
        seen.add(mp)
        try:
            u = psutil.disk_usage(mp)
        except OSError as e:
            raise InspectionError(f"Failed to read disk usage of {mp}: {e}") from e
        rows.append(
            MountCapacity(
                mount_point=mp,
                total_bytes=int(u.total),
                available_bytes=int(u.free),
            )
        )

    missing = wanted - seen
    if missing:
        logger.debug("Not mounted, skipped: %s", ", ".join(sorted(missing)))

    return rows
