"""nasubot: disk space and btrfs scrub notifier for a home NAS."""

__version__ = "0.1.0"
