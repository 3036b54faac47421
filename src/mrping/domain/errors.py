"""Domain-specific exception classes for the merge request ping relay."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for all domain errors in the ping relay."""


class TeamConfigError(RelayError):
    """Raised when the team-to-channel mapping file cannot be parsed.

    Attributes:
        path: The file that failed to load.
    """

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid team configuration in {path}: {reason}")


class MergeRequestUnavailableError(RelayError):
    """Raised when merge request details cannot be fetched from GitLab.

    Fatal for the current webhook invocation; there is no retry.

    Attributes:
        project_id: The GitLab project ID.
        iid: The merge request IID within the project.
    """

    def __init__(self, project_id: int, iid: int) -> None:
        self.project_id = project_id
        self.iid = iid
        super().__init__(
            f"Failed to fetch merge request details (project: {project_id}, MR: {iid})"
        )


class NotificationError(RelayError):
    """Raised when Slack rejects a ``chat.postMessage`` call.

    Attributes:
        channel: The channel the message was addressed to.
        reason: The Slack error code, e.g. ``channel_not_found``.
    """

    def __init__(self, channel: str, reason: str) -> None:
        self.channel = channel
        self.reason = reason
        super().__init__(f"Failed to post notification to '{channel}': {reason}")
