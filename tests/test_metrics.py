"""Tests for Prometheus metrics endpoint and relay counters."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mrping.observability.metrics import (
    NOTIFICATIONS_SENT,
    WEBHOOK_EVENTS,
    setup_metrics,
)


@pytest.fixture()
def metrics_app() -> FastAPI:
    """Create a minimal FastAPI app with Prometheus instrumentation.

    The instrumentator registers its collectors once and subsequent calls
    are no-ops (guarded internally).
    """
    app = FastAPI()

    @app.get("/hello")
    async def hello():
        return {"msg": "hello"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready():
        return {"status": "ready"}

    setup_metrics(app)
    return app


@pytest.fixture()
def metrics_client(metrics_app: FastAPI) -> TestClient:
    """TestClient for the metrics-enabled app."""
    return TestClient(metrics_app)


def test_metrics_endpoint_returns_prometheus_format(metrics_client: TestClient) -> None:
    """GET /metrics returns 200 with Prometheus-format text containing expected metrics."""
    WEBHOOK_EVENTS.labels(outcome="no_action").inc(0)
    NOTIFICATIONS_SENT.labels(mode="team").inc(0)
    metrics_client.get("/hello")
    resp = metrics_client.get("/metrics")
    assert resp.status_code == 200
    body = resp.text
    assert "http_request" in body
    assert "mrping_webhook_events_total" in body
    assert "mrping_notifications_sent_total" in body


def test_excluded_handlers_not_in_metrics(metrics_client: TestClient) -> None:
    """/health and /ready do NOT appear in metrics output (excluded_handlers works)."""
    metrics_client.get("/health")
    metrics_client.get("/ready")
    resp = metrics_client.get("/metrics")
    lines = [
        line
        for line in resp.text.splitlines()
        if "http_request_duration" in line and 'handler="' in line
    ]
    for line in lines:
        assert '/health"' not in line, f"/health found in metrics: {line}"
        assert '/ready"' not in line, f"/ready found in metrics: {line}"


def test_notifications_counter_increments(metrics_client: TestClient) -> None:
    """NOTIFICATIONS_SENT increments are reflected in /metrics output."""
    series = 'mrping_notifications_sent_total{mode="all"}'
    NOTIFICATIONS_SENT.labels(mode="all").inc(0)
    initial_value = _extract_value(metrics_client.get("/metrics").text, series)

    NOTIFICATIONS_SENT.labels(mode="all").inc()
    new_value = _extract_value(metrics_client.get("/metrics").text, series)

    assert new_value == initial_value + 1.0


def _extract_value(text: str, series: str) -> float:
    """Extract the numeric value of a labelled series from Prometheus text output."""
    for line in text.splitlines():
        if line.startswith(series + " "):
            return float(line.split()[-1])
    raise ValueError(f"Series {series} not found in output")
