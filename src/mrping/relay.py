"""Per-event relay from a GitLab merge request comment to a Slack notification.

``PingRelay.handle`` walks one webhook event through a linear state machine:

    received -> validated -> (rejected | team-resolved) -> (request-fetched)
    -> (mentions-resolved) -> notified -> responded

and always returns a terminal ``RelayOutcome``.  Nothing is retried or
deduplicated: delivering the same event twice posts twice.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import structlog

from mrping.commands import parse_command, parse_note_event
from mrping.domain.models import NoteEvent, PingCommand, PingMode
from mrping.gitlab.client import GitLabClient
from mrping.mentions import fetch_reviewer_emails, resolve_mentions
from mrping.observability.metrics import NOTIFICATIONS_SENT
from mrping.slack.client import SlackNotifier
from mrping.slack.messages import (
    BROADCAST_MARKER,
    NO_REVIEWERS_FALLBACK,
    compose_message,
    format_mentions,
)
from mrping.teams import TeamDirectory

logger = structlog.get_logger()


class RelayOutcome(Enum):
    """Terminal states of a webhook invocation, with their HTTP response."""

    UNSUPPORTED = (400, "Unsupported event type")
    NO_ACTION = (200, "No action required")
    INVALID_TEAM = (400, "Invalid team or configuration")
    SENT = (200, "Notification sent.")
    INTERNAL_ERROR = (500, "Internal Server Error")

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body


class PingRelay:
    """Turns ``/ping`` comments into Slack notifications.

    All collaborators are injected; the relay holds no mutable state, so a
    single instance serves concurrent webhook calls.
    """

    def __init__(
        self,
        teams: TeamDirectory,
        gitlab: GitLabClient,
        slack: SlackNotifier,
    ) -> None:
        self.teams = teams
        self.gitlab = gitlab
        self.slack = slack

    async def handle(self, payload: Any) -> RelayOutcome:
        """Process one decoded webhook body.

        Args:
            payload: The JSON-decoded request body, or ``None`` if the body
                was not valid JSON.

        Returns:
            The terminal outcome.  Upstream failures are logged and reported
            as ``INTERNAL_ERROR``; they are never raised.
        """
        event = parse_note_event(payload)
        if event is None:
            return RelayOutcome.UNSUPPORTED

        command = parse_command(event.object_attributes.note)
        if command is None:
            return RelayOutcome.NO_ACTION

        channel = self.teams.channel_for(command.team)
        if channel is None:
            logger.warning("team_not_configured", team=command.team)
            return RelayOutcome.INVALID_TEAM

        log = logger.bind(
            project_id=event.project_id,
            iid=event.merge_request.iid,
            team=command.team,
            mode=str(command.mode),
        )
        try:
            text = await self._build_message(event, command)
            await self.slack.post_message(channel, text)
        except Exception:
            log.exception("webhook_processing_failed")
            return RelayOutcome.INTERNAL_ERROR

        NOTIFICATIONS_SENT.labels(mode=str(command.mode)).inc()
        log.info("notification_sent", channel=channel)
        return RelayOutcome.SENT

    async def _build_message(self, event: NoteEvent, command: PingCommand) -> str:
        """Resolve the mention text and merge request link for *event*."""
        mr = event.merge_request

        if command.mode is PingMode.ALL and mr.title and mr.url:
            return compose_message(BROADCAST_MARKER, mr.title, mr.url)

        details = await self.gitlab.fetch_merge_request(event.project_id, mr.iid)
        if command.mode is PingMode.ALL:
            return compose_message(BROADCAST_MARKER, details.title, details.web_url)

        mentions = NO_REVIEWERS_FALLBACK
        emails = await fetch_reviewer_emails(self.gitlab, details.reviewers)
        if emails:
            mentions = format_mentions(await resolve_mentions(self.slack, emails))
        return compose_message(mentions, details.title, details.web_url)

    async def aclose(self) -> None:
        """Release outbound HTTP resources."""
        await self.gitlab.aclose()
