"""Inspectors: disk capacity and btrfs scrub status of the local host."""

from .disk import inspect_disks
from .models import InspectionError, MountCapacity, ScrubResult
from .scrub import classify_scrub_output, inspect_scrub, query_scrub_status
