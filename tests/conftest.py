"""Shared pytest fixtures for the ping relay test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from mrping.domain.models import MergeRequestDetails, Reviewer
from mrping.relay import PingRelay
from mrping.teams import TeamConfig, TeamDirectory


def make_note_payload(
    note: str | None = "/ping team1",
    *,
    object_kind: str = "note",
    noteable_type: str = "MergeRequest",
    project_id: int = 42,
    iid: int = 7,
    title: str | None = "Add retry-free relay",
    url: str | None = "https://gitlab.example.com/group/app/-/merge_requests/7",
) -> dict[str, Any]:
    """Build a GitLab note-on-merge-request webhook body."""
    merge_request: dict[str, Any] = {"iid": iid, "state": "opened"}
    if title is not None:
        merge_request["title"] = title
    if url is not None:
        merge_request["url"] = url
    return {
        "object_kind": object_kind,
        "event_type": "note",
        "project_id": project_id,
        "user": {"id": 99, "username": "commenter"},
        "object_attributes": {
            "id": 1234,
            "noteable_type": noteable_type,
            "note": note,
        },
        "merge_request": merge_request,
    }


@pytest.fixture
def teams() -> TeamDirectory:
    """A directory with two configured teams."""
    return TeamDirectory(
        {
            "team1": TeamConfig(slack_channel="C_TEAM1"),
            "Platform": TeamConfig(slack_channel="C_PLATFORM"),
        }
    )


@pytest.fixture
def mr_details() -> MergeRequestDetails:
    """Merge request details with two reviewers."""
    return MergeRequestDetails(
        title="Add retry-free relay",
        web_url="https://gitlab.example.com/group/app/-/merge_requests/7",
        reviewers=[Reviewer(id=1, username="alice"), Reviewer(id=2, username="bob")],
    )


@pytest.fixture
def gitlab(mr_details: MergeRequestDetails) -> MagicMock:
    """A GitLabClient stand-in: user 1 and 2 both have public emails."""
    client = MagicMock()
    client.fetch_merge_request = AsyncMock(return_value=mr_details)
    emails = {1: "alice@example.com", 2: "bob@example.com"}
    client.fetch_public_email = AsyncMock(side_effect=lambda user_id: emails.get(user_id))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def slack() -> MagicMock:
    """A SlackNotifier stand-in: only alice resolves to a Slack user."""
    notifier = MagicMock()
    users = {"alice@example.com": "U_ALICE"}
    notifier.lookup_user_id = AsyncMock(side_effect=lambda email: users.get(email))
    notifier.post_message = AsyncMock(return_value="1700000000.000100")
    return notifier


@pytest.fixture
def relay(teams: TeamDirectory, gitlab: MagicMock, slack: MagicMock) -> PingRelay:
    """A relay wired to mocked collaborators."""
    return PingRelay(teams=teams, gitlab=gitlab, slack=slack)


@pytest.fixture
def note_payload() -> Any:
    """Factory fixture for webhook bodies (see ``make_note_payload``)."""
    return make_note_payload
