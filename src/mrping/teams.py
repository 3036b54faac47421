"""Static team-to-Slack-channel mapping, loaded once at startup.

The mapping file is YAML, which also accepts the JSON form::

    {
      "team1": {"slack_channel": "C0123456789"},
      "platform": {"slack_channel": "C0987654321"}
    }

Team keys are lower-cased on load so they match parsed command identifiers.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mrping.domain.errors import TeamConfigError

logger = structlog.get_logger()


class TeamConfig(BaseModel):
    """Notification settings for a single team."""

    model_config = ConfigDict(frozen=True)

    slack_channel: str = Field(description="Slack channel ID (or name) to post to")

    @field_validator("slack_channel")
    @classmethod
    def channel_must_not_be_empty(cls, v: str) -> str:
        """Ensure the channel is not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("slack_channel must not be empty")
        return v.strip()


class TeamDirectory:
    """Read-only lookup from team identifier to Slack channel."""

    def __init__(self, teams: Mapping[str, TeamConfig]) -> None:
        self._teams: Mapping[str, TeamConfig] = MappingProxyType(
            {name.strip().lower(): cfg for name, cfg in teams.items()}
        )

    def __len__(self) -> int:
        return len(self._teams)

    def __contains__(self, team: object) -> bool:
        return isinstance(team, str) and self.channel_for(team) is not None

    @property
    def teams(self) -> list[str]:
        """Sorted list of configured team identifiers."""
        return sorted(self._teams)

    def channel_for(self, team: str) -> str | None:
        """Return the Slack channel for *team*, or ``None`` if unconfigured.

        Never raises: an unknown or empty identifier is a normal rejection
        path for callers.
        """
        entry = self._teams.get(team.strip().lower())
        return entry.slack_channel if entry is not None else None


def load_team_config(path: Path) -> TeamDirectory:
    """Load the team mapping file into a ``TeamDirectory``.

    Args:
        path: Path to a YAML or JSON mapping of team -> ``{slack_channel}``.

    Returns:
        The populated directory.

    Raises:
        FileNotFoundError: If the config file does not exist.
        TeamConfigError: If the file is not a mapping of valid team entries.
    """
    if not path.exists():
        raise FileNotFoundError(f"Teams config not found: {path}")

    with path.open(encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise TeamConfigError(path, str(exc)) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TeamConfigError(path, "top-level value must be a mapping")

    teams: dict[str, TeamConfig] = {}
    for name, entry in raw.items():
        key = str(name).strip().lower()
        if key in teams:
            raise TeamConfigError(path, f"team '{name}' duplicates another key ignoring case")
        try:
            teams[key] = TeamConfig.model_validate(entry)
        except ValidationError as exc:
            raise TeamConfigError(path, f"team '{name}': {exc.errors()[0]['msg']}") from exc

    directory = TeamDirectory(teams)
    logger.info("team_config_loaded", path=str(path), teams=len(directory))
    return directory
