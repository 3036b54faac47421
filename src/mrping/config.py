"""Centralized, typed configuration using pydantic-settings.

Provides a single ``Settings`` class backed by ``.env`` file and environment
variables, a cached ``get_settings()`` accessor, and a ``validate_credentials()``
startup gate that enforces credential presence in production mode.

IMPORTANT: This module has ZERO imports from the ``mrping`` package to
prevent circular imports.  Only stdlib, pydantic, pydantic_settings, and
structlog are used.
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    ``SecretStr`` fields prevent accidental token leaks in logs or error output.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- General ---------------------------------------------------------------
    production: bool = False
    port: int = 3000
    teams_config_path: Path = Path("config.json")

    # -- Slack -----------------------------------------------------------------
    slack_token: SecretStr = SecretStr("")

    # -- GitLab ----------------------------------------------------------------
    gitlab_token: SecretStr = SecretStr("")
    gitlab_url: str = "https://gitlab.com"

    # -- Outbound HTTP ---------------------------------------------------------
    http_timeout: float = 10.0

    # -- Observability ---------------------------------------------------------
    sentry_dsn: str = ""


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    The ``@lru_cache`` decorator ensures environment variables are parsed
    exactly once.  Call ``get_settings.cache_clear()`` in tests to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Log only the structured errors list -- never the full exception
        # which may contain raw SecretStr values.
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)


def validate_credentials(settings: Settings) -> None:
    """Enforce credential presence at startup.

    In **production** mode (``settings.production is True``), the application
    exits with a clear error block if any required credential is missing.

    In **development** mode, each missing credential is logged as a warning
    but the application continues to start.

    Args:
        settings: The loaded application settings.
    """
    errors: list[str] = []

    if not settings.teams_config_path.exists():
        errors.append(f"Teams config file not found: {settings.teams_config_path}")

    if not settings.slack_token.get_secret_value():
        errors.append("SLACK_TOKEN is empty or not set")

    if not settings.gitlab_token.get_secret_value():
        errors.append("GITLAB_TOKEN is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        print("\n=== STARTUP FAILED ===", file=sys.stderr)
        print("Missing required credentials for production mode:", file=sys.stderr)
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        print("======================\n", file=sys.stderr)
        sys.exit(1)
    else:
        for err in errors:
            logger.warning("credential_missing_dev", detail=err)
