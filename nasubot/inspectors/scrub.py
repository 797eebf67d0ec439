"""Scrub inspector: runs `btrfs scrub status` per mount point.

The tool's output format is not stable, so results are classified with a
plain substring check rather than parsed.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from .models import InspectionError, ScrubResult

logger = logging.getLogger(__name__)

_ERROR_SUMMARY = "Error summary"
_NO_ERRORS = "no errors found"


def classify_scrub_output(message: str) -> bool:
    """True if some line reports an error summary other than "no errors found"."""
    for line in message.splitlines():
        if _ERROR_SUMMARY in line and _NO_ERRORS not in line:
            return True
    return False


def query_scrub_status(mount_point: str, command: str = "btrfs") -> ScrubResult:
    """Run the status query for one mount point and classify its output."""
    cmd = [command, "scrub", "status", mount_point]
    try:
        proc = subprocess.run(cmd, capture_output=True, check=False)
    except OSError as e:
        raise InspectionError(f"Failed to run {' '.join(cmd)}: {e}") from e

    stdout = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise InspectionError(
            f"{' '.join(cmd)} exited with {proc.returncode}: {stderr or stdout.strip()}"
        )

    logger.info("btrfs scrub status (%s):\n%s", mount_point, stdout)
    return ScrubResult(
        mount_point=mount_point,
        raw_message=stdout,
        is_error=classify_scrub_output(stdout),
    )


def inspect_scrub(
    mount_points: Sequence[str],
    command: str = "btrfs",
    max_workers: int = 4,
) -> list[ScrubResult]:
    """Query every mount point concurrently; results keep the input order."""
    if not mount_points:
        return []

    workers = max(1, min(max_workers, len(mount_points)))
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(query_scrub_status, mp, command) for mp in mount_points]
        # .result() re-raises the worker's InspectionError
        return [f.result() for f in futures]
