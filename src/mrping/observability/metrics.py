"""Prometheus metrics instrumentation for the ping relay.

Provides:
- ``setup_metrics(app)``: Attach prometheus-fastapi-instrumentator to a FastAPI app,
  exposing ``/metrics`` with HTTP request duration/count plus custom counters.
- ``WEBHOOK_EVENTS``: Counter of handled webhook events by terminal outcome.
- ``NOTIFICATIONS_SENT``: Counter of Slack notifications posted by ping mode.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator

WEBHOOK_EVENTS: Counter = Counter(
    "mrping_webhook_events_total",
    "Webhook events handled, by terminal outcome",
    ["outcome"],
)

NOTIFICATIONS_SENT: Counter = Counter(
    "mrping_notifications_sent_total",
    "Slack notifications posted, by ping mode",
    ["mode"],
)


def setup_metrics(app: FastAPI) -> None:
    """Instrument *app* with Prometheus HTTP metrics and expose ``/metrics``.

    Excludes health/ready/metrics endpoints from instrumentation to avoid
    noise in dashboards.

    Args:
        app: The FastAPI application to instrument.
    """
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/health", "/ready", "/metrics"],
    ).instrument(app).expose(app, include_in_schema=False, should_gzip=True)
