"""Optional Sentry error reporting for the relay.

Sentry is enabled only when ``SENTRY_DSN`` is set.  Nothing is sent through
the SDK's own ``logging`` hook; instead the structlog chain carries a
``SentryProcessor`` so that the relay's ERROR events reach Sentry with their
fields (``request_id`` plus ``project_id``, ``iid`` and ``team`` where bound):

- ``merge_request_fetch_failed``: merge request details unavailable
- ``slack_post_failed``: Slack rejected the notification
- ``webhook_processing_failed``: the handler answered 500

Every event is tagged ``service=mr-ping``.  Request bodies and user data are
never attached (``send_default_pii=False``).
"""

from __future__ import annotations

import logging

import sentry_sdk
import structlog
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog_sentry import SentryProcessor

from mrping.observability.middleware import SERVICE_NAME

TRACES_SAMPLE_RATE = 0.1


def init_sentry(dsn: str) -> bool:
    """Start the Sentry SDK for this service, or do nothing for an empty *dsn*.

    Returns:
        ``True`` if reporting is active and the structlog bridge should be
        installed by ``configure_logging``.
    """
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=TRACES_SAMPLE_RATE,
        send_default_pii=False,
        # structlog-sentry does the capturing; the stdlib hook would duplicate it.
        integrations=[LoggingIntegration(event_level=None, level=None)],
    )
    sentry_sdk.set_tag("service", SERVICE_NAME)
    return True


def get_sentry_processor() -> structlog.types.Processor:
    """Structlog processor forwarding ERROR-level relay events to Sentry.

    Goes after ``add_log_level`` and before the renderer.
    """
    return SentryProcessor(event_level=logging.ERROR)
