"""Health and readiness endpoints for container orchestration.

Provides two top-level routes:

- ``GET /health`` -- Liveness probe.  Returns 200 if the process is alive.
- ``GET /ready``  -- Readiness probe.  Returns 200 only when at least one team
  is configured **and** both the Slack and GitLab tokens are set.  Returns
  503 with per-check details otherwise.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


def register_health_routes(app: FastAPI) -> None:
    """Register ``/health`` and ``/ready`` endpoints on *app*.

    Args:
        app: The FastAPI application instance.
    """

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe -- always returns 200 if the process is running."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(request: Request) -> JSONResponse:
        """Readiness probe -- checks team config and API credentials."""
        relay = getattr(request.app.state, "relay", None)
        settings = getattr(request.app.state, "settings", None)
        checks: dict[str, str] = {}

        # Check 1: at least one team mapped to a channel
        teams = getattr(relay, "teams", None)
        checks["teams"] = "ok" if teams is not None and len(teams) > 0 else "fail"

        # Check 2 and 3: outbound API tokens present
        if settings is not None:
            checks["slack"] = "ok" if settings.slack_token.get_secret_value() else "fail"
            checks["gitlab"] = "ok" if settings.gitlab_token.get_secret_value() else "fail"
        else:
            checks["slack"] = "fail"
            checks["gitlab"] = "fail"

        all_ok = all(v == "ok" for v in checks.values())
        status = "ready" if all_ok else "not_ready"
        code = 200 if all_ok else 503

        return JSONResponse(content={"status": status, "checks": checks}, status_code=code)
