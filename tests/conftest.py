"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from nasubot.inspectors.models import GIB, MountCapacity, ScrubResult

SCRUB_WITH_ERRORS = """UUID:             0000
Scrub started:    Thu Jan 23 22:52:24 2025
Status:           finished
Duration:         0:53:47
Total to scrub:   1.18TiB
Rate:             383.25MiB/s (some device limits set)
Error summary:    csum=72
  Corrected:      2
  Uncorrectable:  72
  Unverified:     0"""

SCRUB_CLEAN = """UUID:             0000
Scrub started:    Thu Jan 23 22:52:24 2025
Status:           finished
Duration:         0:53:47
Total to scrub:   1.18TiB
Rate:             383.25MiB/s (some device limits set)
Error summary:    no errors found"""


class RecordingChannel:
    """Stand-in for SlackChannel that remembers what it was asked to send."""

    def __init__(self, result: bool = True, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc
        self.sent: list[str] = []
        self.endpoints: list[str] = []

    async def deliver(self, text: str, endpoint: str) -> bool:
        self.sent.append(text)
        self.endpoints.append(endpoint)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def scrub_with_errors_text() -> str:
    return SCRUB_WITH_ERRORS


@pytest.fixture
def scrub_clean_text() -> str:
    return SCRUB_CLEAN


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def make_channel() -> type[RecordingChannel]:
    """Build channels that fail or refuse: make_channel(result=False), make_channel(exc=...)."""
    return RecordingChannel


@pytest.fixture
def nearly_full() -> MountCapacity:
    """10 GiB disk with 1 GiB left (90% used)."""
    return MountCapacity(mount_point="/mnt/data", total_bytes=10 * GIB, available_bytes=1 * GIB)


@pytest.fixture
def half_full() -> MountCapacity:
    return MountCapacity(mount_point="/", total_bytes=100 * GIB, available_bytes=50 * GIB)


@pytest.fixture
def clean_scrub() -> ScrubResult:
    return ScrubResult(mount_point="/mnt/data", raw_message=SCRUB_CLEAN, is_error=False)


@pytest.fixture
def failed_scrub() -> ScrubResult:
    return ScrubResult(mount_point="/mnt/backup", raw_message=SCRUB_WITH_ERRORS, is_error=True)


@pytest.fixture
def mock_psutil():
    """Patch psutil in the disk inspector; tests fill in partitions / usage."""
    with patch("nasubot.inspectors.disk.psutil") as mock_ps:
        mock_ps.disk_partitions.return_value = []
        yield mock_ps


@pytest.fixture
def mock_subprocess():
    """Patch subprocess.run in the scrub inspector with a clean scrub result."""
    with patch("nasubot.inspectors.scrub.subprocess") as mock_sp:
        result = MagicMock()
        result.stdout = SCRUB_CLEAN.encode()
        result.stderr = b""
        result.returncode = 0
        mock_sp.run.return_value = result
        yield mock_sp
