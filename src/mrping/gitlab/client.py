"""Async GitLab REST API (v4) client for merge request and user lookups.

Wraps a long-lived ``httpx.AsyncClient`` authenticated with a
``PRIVATE-TOKEN`` header.  Merge request lookups are fatal on failure;
user email lookups degrade to ``None`` so that one missing reviewer does not
abort the whole notification.
"""

from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from mrping.domain.errors import MergeRequestUnavailableError
from mrping.domain.models import MergeRequestDetails

logger = structlog.get_logger()


class GitLabClient:
    """Fetches merge request details and user public emails from GitLab."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: GitLab instance root, e.g. ``https://gitlab.com``.
            token: Personal or project access token with ``read_api`` scope.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use ``MockTransport``).
        """
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api/v4",
            headers={"PRIVATE-TOKEN": token},
            timeout=timeout,
            transport=transport,
        )

    async def fetch_merge_request(self, project_id: int, iid: int) -> MergeRequestDetails:
        """Fetch title, URL, and reviewers for a merge request.

        Args:
            project_id: The GitLab project ID.
            iid: The merge request IID within the project.

        Returns:
            The parsed merge request details.

        Raises:
            MergeRequestUnavailableError: On transport failure, a non-2xx
                status, or an unparseable response body.
        """
        try:
            response = await self._client.get(f"/projects/{project_id}/merge_requests/{iid}")
            response.raise_for_status()
            return MergeRequestDetails.model_validate(response.json())
        except (httpx.HTTPError, ValidationError, ValueError) as exc:
            logger.error(
                "merge_request_fetch_failed",
                project_id=project_id,
                iid=iid,
                error=str(exc),
            )
            raise MergeRequestUnavailableError(project_id, iid) from exc

    async def fetch_public_email(self, user_id: int) -> str | None:
        """Return a user's public email, or ``None`` if unset or unavailable."""
        try:
            response = await self._client.get(f"/users/{user_id}")
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("gitlab_user_fetch_failed", user_id=user_id, error=str(exc))
            return None

        email = data.get("public_email") if isinstance(data, dict) else None
        if not email:
            logger.info("gitlab_user_has_no_public_email", user_id=user_id)
            return None
        return str(email)

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
