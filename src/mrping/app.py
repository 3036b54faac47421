"""Application entry point serving the GitLab webhook with FastAPI and uvicorn.

Configures:
- **structlog** with JSON rendering (production) or colored console (development)
- **Sentry** error forwarding when ``SENTRY_DSN`` is set
- **Team directory** and outbound GitLab/Slack clients, injected into a
  single ``PingRelay`` stored on ``app.state``
- **Health**, **request ID**, and **Prometheus** instrumentation
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from mrping.config import Settings, get_settings, validate_credentials
from mrping.domain.errors import TeamConfigError
from mrping.gitlab.client import GitLabClient
from mrping.health import register_health_routes
from mrping.observability.metrics import setup_metrics
from mrping.observability.middleware import SERVICE_NAME, RequestIdMiddleware
from mrping.observability.sentry import get_sentry_processor, init_sentry
from mrping.relay import PingRelay
from mrping.slack.client import SlackNotifier
from mrping.teams import TeamDirectory, load_team_config
from mrping.webhook import router as webhook_router

logger = structlog.get_logger()


def configure_logging(production: bool = False, sentry_enabled: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
        sentry_enabled: Forward ERROR-level events to Sentry if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]
    if sentry_enabled:
        shared_processors.append(get_sentry_processor())
    shared_processors += [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)


def build_relay(settings: Settings, teams: TeamDirectory | None = None) -> PingRelay:
    """Construct the relay and its outbound clients from *settings*.

    Args:
        settings: Application settings.
        teams: Pre-loaded team directory.  If ``None``, it is loaded from
            ``settings.teams_config_path``.

    Returns:
        A ready-to-serve ``PingRelay``.

    Raises:
        FileNotFoundError: If the teams config file does not exist.
        TeamConfigError: If the teams config file is malformed.
    """
    if teams is None:
        teams = load_team_config(settings.teams_config_path)

    gitlab = GitLabClient(
        base_url=settings.gitlab_url,
        token=settings.gitlab_token.get_secret_value(),
        timeout=settings.http_timeout,
    )
    slack = SlackNotifier(
        bot_token=settings.slack_token.get_secret_value(),
        timeout=settings.http_timeout,
    )
    logger.info("relay_initialized", gitlab_url=settings.gitlab_url, teams=teams.teams)
    return PingRelay(teams=teams, gitlab=gitlab, slack=slack)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Lifespan context manager for FastAPI startup and shutdown.

    On shutdown: closes the relay's outbound HTTP clients.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application.
    """
    logger.info("FastAPI application starting")
    yield
    relay: PingRelay | None = getattr(app.state, "relay", None)
    if relay is not None:
        await relay.aclose()
        logger.info("Outbound clients closed on shutdown")


def create_app(relay: PingRelay, settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI app with lifespan, webhook router, and health routes.

    Args:
        relay: The relay handling webhook events.
        settings: Application settings.  If ``None``, ``get_settings()`` is used.

    Returns:
        The configured FastAPI application.
    """
    fastapi_app = FastAPI(title="MR Ping Relay", lifespan=lifespan)
    fastapi_app.state.relay = relay
    fastapi_app.state.settings = settings if settings is not None else get_settings()
    fastapi_app.include_router(webhook_router)
    register_health_routes(fastapi_app)
    fastapi_app.add_middleware(RequestIdMiddleware)
    setup_metrics(fastapi_app)
    return fastapi_app


async def main() -> None:
    """Main entry point.

    1. Load settings and configure logging/Sentry
    2. Validate credentials
    3. Load team config and build the relay
    4. Serve the FastAPI app with uvicorn
    """
    settings = get_settings()
    sentry_enabled = init_sentry(settings.sentry_dsn)
    configure_logging(production=settings.production, sentry_enabled=sentry_enabled)
    logger.info("Application starting")

    validate_credentials(settings)

    try:
        relay = build_relay(settings)
    except (FileNotFoundError, TeamConfigError) as exc:
        logger.error("team_config_load_failed", error=str(exc))
        sys.exit(1)

    fastapi_app = create_app(relay, settings)

    config = uvicorn.Config(
        fastapi_app,
        host="0.0.0.0",
        port=settings.port,
        log_level="info",
    )
    server = uvicorn.Server(config)
    logger.info("Service is running", port=settings.port)
    await server.serve()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
