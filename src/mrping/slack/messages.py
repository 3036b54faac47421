"""Notification text builders.

Slack mrkdwn is used directly: ``<@U123>`` mentions a user, ``<!here>``
pings every active member of the channel, and ``<url|label>`` renders a link.
"""

from __future__ import annotations

from collections.abc import Iterable

from mrping.domain.models import ResolvedMention

BROADCAST_MARKER = "<!here>"

# Used as the greeting when a directed ping finds no reviewer emails at all,
# producing "Hey team,".
NO_REVIEWERS_FALLBACK = "team"


def format_mentions(mentions: Iterable[ResolvedMention]) -> str:
    """Join rendered mentions with ``", "``, preserving order."""
    return ", ".join(m.render() for m in mentions)


def compose_message(mentions: str, title: str, url: str) -> str:
    """Build the notification text for a merge request.

    Args:
        mentions: Already-formatted mention text (users, marker, or fallback).
        title: The merge request title.
        url: The merge request web URL.

    Returns:
        The message text.
    """
    return f"Hey {mentions},\nMerge request *<{url}|{title}>* requires your attention."
