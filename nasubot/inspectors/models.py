"""Inspection results shared by the disk and scrub inspectors."""

from __future__ import annotations

from dataclasses import dataclass

GIB = 1024 * 1024 * 1024


class InspectionError(OSError):
    """Raised when host state cannot be read at all (mount table, btrfs tool)."""


@dataclass(frozen=True)
class MountCapacity:
    """Capacity of a single mounted filesystem.

    Precondition: ``available_bytes <= total_bytes``. The data source is
    trusted, nothing here checks it.
    """

    mount_point: str
    total_bytes: int
    available_bytes: int

    @property
    def used_percent(self) -> float:
        used = self.total_bytes - self.available_bytes
        return used / self.total_bytes * 100.0

    @property
    def available_gb(self) -> int:
        return self.available_bytes // GIB

    @property
    def total_gb(self) -> int:
        return self.total_bytes // GIB


@dataclass(frozen=True)
class ScrubResult:
    """Captured `btrfs scrub status` output for one mount point."""

    mount_point: str
    raw_message: str
    is_error: bool
