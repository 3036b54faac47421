"""Webhook payload validation and ``/ping`` command parsing.

Supported comment syntax::

    /ping <team>        mention the merge request's reviewers
    /ping-all <team>    broadcast to everyone active in the team's channel

Markers are case-insensitive and must be followed by whitespace or the end
of the comment.  The team identifier is stripped and lower-cased.

A marker glued to other text is not a command: ``/pinged`` and
``/ping-allteam1`` are ordinary comments and get "No action required".
Write ``/ping-all team1`` instead.
"""

from __future__ import annotations

import re
from typing import Any

import structlog
from pydantic import ValidationError

from mrping.domain.models import NoteEvent, PingCommand, PingMode

logger = structlog.get_logger()

NOTE_EVENT_KIND = "note"
MERGE_REQUEST_NOTEABLE = "MergeRequest"

CMD_RE = re.compile(
    r"^/ping(?P<all>-all)?(?:\s+(?P<team>.*))?$",
    re.IGNORECASE | re.DOTALL,
)


def parse_note_event(payload: Any) -> NoteEvent | None:
    """Validate a webhook body as a note on a merge request.

    Args:
        payload: The decoded JSON body (any type; non-dicts are rejected).

    Returns:
        The validated ``NoteEvent``, or ``None`` when the body is not a
        merge request note or lacks the fields the relay depends on.
    """
    if not isinstance(payload, dict):
        return None

    attributes = payload.get("object_attributes")
    if payload.get("object_kind") != NOTE_EVENT_KIND or not isinstance(attributes, dict):
        return None
    if attributes.get("noteable_type") != MERGE_REQUEST_NOTEABLE:
        return None

    try:
        return NoteEvent.model_validate(payload)
    except ValidationError as exc:
        logger.warning("note_event_invalid", errors=exc.errors(include_url=False))
        return None


def parse_command(text: str | None) -> PingCommand | None:
    """Classify a comment as a directed or broadcast ping.

    Args:
        text: The raw comment body.

    Returns:
        A ``PingCommand`` for ``/ping`` or ``/ping-all`` comments, ``None``
        otherwise.  A bare marker yields an empty team identifier.
    """
    if not text:
        return None
    m = CMD_RE.match(text.strip())
    if not m:
        return None
    mode = PingMode.ALL if m.group("all") else PingMode.TEAM
    team = (m.group("team") or "").strip().lower()
    return PingCommand(mode=mode, team=team)
