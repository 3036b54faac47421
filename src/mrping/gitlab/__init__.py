"""GitLab integration: merge request and user lookups."""

from mrping.gitlab.client import GitLabClient

__all__ = ["GitLabClient"]
