"""Slack integration: identity lookup, message composition, and posting."""

from mrping.slack.client import SlackNotifier
from mrping.slack.messages import (
    BROADCAST_MARKER,
    NO_REVIEWERS_FALLBACK,
    compose_message,
    format_mentions,
)

__all__ = [
    "BROADCAST_MARKER",
    "NO_REVIEWERS_FALLBACK",
    "SlackNotifier",
    "compose_message",
    "format_mentions",
]
