"""FastAPI webhook endpoint for GitLab merge request comment events.

The route decodes the body and delegates to the ``PingRelay`` stored on
``app.state.relay`` at startup.  Responses are plain text, mirroring what
GitLab shows in its webhook delivery log.  The sender is not authenticated.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from mrping.observability.metrics import WEBHOOK_EVENTS
from mrping.relay import PingRelay

logger = structlog.get_logger()

router = APIRouter()


@router.post("/notify", response_class=PlainTextResponse)
async def notify(request: Request) -> PlainTextResponse:
    """Receive a GitLab note event and relay ``/ping`` commands to Slack.

    Args:
        request: The incoming FastAPI request.

    Returns:
        A plain-text response whose status reflects the relay outcome.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("webhook_body_not_json")
        payload = None

    relay: PingRelay = request.app.state.relay
    outcome = await relay.handle(payload)

    WEBHOOK_EVENTS.labels(outcome=outcome.name.lower()).inc()
    logger.info("webhook_handled", outcome=outcome.name, status_code=outcome.status_code)
    return PlainTextResponse(outcome.body, status_code=outcome.status_code)
