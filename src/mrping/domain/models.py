"""Pydantic v2 models for webhook payloads, GitLab responses, and mentions.

Payload models ignore unknown keys: GitLab note events carry far more data
than the relay needs, and only the fields below are validated.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PingMode(StrEnum):
    """How a ping command addresses the channel."""

    TEAM = "team"
    ALL = "all"


class PingCommand(BaseModel):
    """A parsed ``/ping`` or ``/ping-all`` comment."""

    model_config = ConfigDict(frozen=True)

    mode: PingMode
    team: str = Field(description="Lower-cased, whitespace-stripped team identifier")


class NoteAttributes(BaseModel):
    """The ``object_attributes`` block of a GitLab note event."""

    noteable_type: str | None = None
    note: str | None = None


class MergeRequestRef(BaseModel):
    """The ``merge_request`` block of a GitLab note event."""

    iid: int
    title: str | None = None
    url: str | None = None


class NoteEvent(BaseModel):
    """A GitLab ``note`` webhook event on a merge request."""

    object_kind: str
    project_id: int
    object_attributes: NoteAttributes
    merge_request: MergeRequestRef


class Reviewer(BaseModel):
    """A reviewer entry from the GitLab merge request details response."""

    id: int
    username: str | None = None


class MergeRequestDetails(BaseModel):
    """The subset of ``GET /projects/:id/merge_requests/:iid`` the relay uses."""

    title: str
    web_url: str
    reviewers: list[Reviewer] = Field(default_factory=list)


class ResolvedMention(BaseModel):
    """A reviewer email and the Slack user it resolved to, if any."""

    model_config = ConfigDict(frozen=True)

    email: str
    slack_user_id: str | None = None

    def render(self) -> str:
        """Return the Slack mention markup, or the raw email when unresolved."""
        if self.slack_user_id:
            return f"<@{self.slack_user_id}>"
        return self.email
