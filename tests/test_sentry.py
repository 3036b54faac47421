"""Tests for optional Sentry reporting of relay errors."""

from __future__ import annotations

import logging
from unittest.mock import patch

from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor

from mrping.observability.sentry import get_sentry_processor, init_sentry


def test_empty_dsn_leaves_sentry_disabled() -> None:
    with (
        patch("mrping.observability.sentry.sentry_sdk.init") as mock_init,
        patch("mrping.observability.sentry.sentry_sdk.set_tag") as mock_tag,
    ):
        assert init_sentry("") is False

    mock_init.assert_not_called()
    mock_tag.assert_not_called()


def test_dsn_starts_sdk_without_pii_and_tags_service() -> None:
    dsn = "https://examplePublicKey@o0.ingest.sentry.io/0"
    with (
        patch("mrping.observability.sentry.sentry_sdk.init") as mock_init,
        patch("mrping.observability.sentry.sentry_sdk.set_tag") as mock_tag,
    ):
        assert init_sentry(dsn) is True

    kwargs = mock_init.call_args.kwargs
    assert kwargs["dsn"] == dsn
    assert kwargs["send_default_pii"] is False
    mock_tag.assert_called_once_with("service", "mr-ping")


def test_stdlib_logging_capture_disabled() -> None:
    """Only the structlog bridge reports, so each relay error is sent once."""
    with (
        patch("mrping.observability.sentry.sentry_sdk.init") as mock_init,
        patch("mrping.observability.sentry.sentry_sdk.set_tag"),
    ):
        init_sentry("https://examplePublicKey@o0.ingest.sentry.io/0")

    integrations = mock_init.call_args.kwargs["integrations"]
    assert len(integrations) == 1
    assert isinstance(integrations[0], LoggingIntegration)


def test_processor_forwards_error_level() -> None:
    processor = get_sentry_processor()

    assert isinstance(processor, SentryProcessor)
    assert processor.event_level == logging.ERROR
