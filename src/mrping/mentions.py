"""Concurrent reviewer-to-mention resolution.

Both stages fan out one task per item inside an ``asyncio.TaskGroup`` and
collect results in input order once every task has finished.  Individual
lookups never raise (they degrade to ``None``), so one slow or missing
reviewer cannot cancel the others.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from mrping.domain.models import ResolvedMention, Reviewer
from mrping.gitlab.client import GitLabClient
from mrping.slack.client import SlackNotifier

logger = structlog.get_logger()


async def fetch_reviewer_emails(gitlab: GitLabClient, reviewers: Sequence[Reviewer]) -> list[str]:
    """Fetch each reviewer's public email concurrently.

    Args:
        gitlab: The GitLab client.
        reviewers: Reviewers in merge request order.

    Returns:
        The emails that were found, in reviewer order.  Reviewers without a
        public email are dropped.
    """
    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(gitlab.fetch_public_email(r.id)) for r in reviewers]

    emails = [email for email in (t.result() for t in tasks) if email]
    if len(emails) < len(reviewers):
        logger.info(
            "reviewer_emails_missing",
            reviewers=len(reviewers),
            found=len(emails),
        )
    return emails


async def resolve_mentions(slack: SlackNotifier, emails: Sequence[str]) -> list[ResolvedMention]:
    """Resolve each email to a Slack user concurrently.

    Args:
        slack: The Slack notifier used for ``users.lookupByEmail``.
        emails: Reviewer emails in reviewer order.

    Returns:
        One ``ResolvedMention`` per email, in the same order.  Unresolved
        entries carry ``slack_user_id=None`` and render as the email.
    """
    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(slack.lookup_user_id(email)) for email in emails]

    mentions = [
        ResolvedMention(email=email, slack_user_id=task.result())
        for email, task in zip(emails, tasks, strict=True)
    ]
    if not any(m.slack_user_id for m in mentions):
        logger.info("no_slack_users_found", emails=len(emails))
    return mentions
