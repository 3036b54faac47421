"""Slack client for resolving reviewer identities and posting notifications.

Wraps ``slack_sdk.web.async_client.AsyncWebClient``.  Identity lookups are
soft-fail (an unresolved reviewer is mentioned by email instead); message
posting failures are raised as ``NotificationError``.
"""

from __future__ import annotations

import math

import structlog
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from mrping.domain.errors import NotificationError

logger = structlog.get_logger()


class SlackNotifier:
    """Looks up Slack users by email and posts messages to channels.

    An empty token is accepted so the service can start in development
    without Slack credentials; API calls then fail and are handled per call.
    """

    def __init__(self, bot_token: str | None = None, timeout: float = 10.0) -> None:
        """Initialize the SlackNotifier.

        Args:
            bot_token: Slack bot token (``SLACK_TOKEN`` via ``Settings``).
            timeout: Per-request timeout in seconds, rounded up to whole
                seconds for the Slack client.
        """
        self._client = AsyncWebClient(token=bot_token or None, timeout=math.ceil(timeout))

    async def lookup_user_id(self, email: str) -> str | None:
        """Return the Slack user ID registered to *email*, or ``None``.

        ``users_not_found`` and transport failures are logged, not raised.
        """
        try:
            response = await self._client.users_lookupByEmail(email=email)
        except SlackApiError as exc:
            logger.warning(
                "slack_user_not_found",
                email=email,
                error=exc.response.get("error", ""),
            )
            return None
        except Exception:
            logger.warning("slack_user_lookup_failed", email=email, exc_info=True)
            return None

        user = response.get("user") or {}
        user_id = user.get("id")
        return str(user_id) if user_id else None

    async def post_message(self, channel: str, text: str) -> str:
        """Post a plain mrkdwn message to *channel*.

        Args:
            channel: Slack channel ID or name.
            text: Message text; Slack mention markup is rendered.

        Returns:
            The Slack message timestamp (ts) for reference.

        Raises:
            NotificationError: If the Slack API rejects the message.
        """
        try:
            response = await self._client.chat_postMessage(channel=channel, text=text)
        except SlackApiError as exc:
            reason = str(exc.response.get("error", "unknown_error"))
            logger.error("slack_post_failed", channel=channel, error=reason)
            raise NotificationError(channel, reason) from exc
        return str(response["ts"])


__all__ = ["SlackApiError", "SlackNotifier"]
