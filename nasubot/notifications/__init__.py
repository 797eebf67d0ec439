"""Notifications: report composition and Slack webhook delivery."""

from .aggregator import (
    NotificationOutcome,
    NotificationRequest,
    make_general_section,
    make_low_space_section,
    make_scrub_section,
    notify,
)
from .slack import DeliveryError, SlackChannel
