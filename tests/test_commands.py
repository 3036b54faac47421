"""Tests for ping command parsing and note event validation."""

from __future__ import annotations

from typing import Any

import pytest

from mrping.commands import parse_command, parse_note_event
from mrping.domain.models import PingCommand, PingMode

# ---------------------------------------------------------------------------
# parse_command
# ---------------------------------------------------------------------------


class TestParseCommand:
    """Classification of comment text into ping commands."""

    def test_directed_ping(self) -> None:
        assert parse_command("/ping team1") == PingCommand(mode=PingMode.TEAM, team="team1")

    def test_broadcast_ping(self) -> None:
        assert parse_command("/ping-all team1") == PingCommand(mode=PingMode.ALL, team="team1")

    def test_case_and_whitespace_normalized(self) -> None:
        """``/PING  Team1  `` resolves to the same team as ``/ping team1``."""
        assert parse_command("/PING  Team1  ") == parse_command("/ping team1")

    def test_broadcast_marker_case_insensitive(self) -> None:
        cmd = parse_command("  /Ping-ALL   Platform\n")
        assert cmd == PingCommand(mode=PingMode.ALL, team="platform")

    @pytest.mark.parametrize("text", ["/ping", "/ping-all", "  /ping   "])
    def test_bare_marker_yields_empty_team(self, text: str) -> None:
        cmd = parse_command(text)
        assert cmd is not None
        assert cmd.team == ""

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "   ",
            "LGTM",
            "please /ping team1",
            "/pinged team1 yesterday",
            "/ping-allteam1",
            "/approve",
        ],
    )
    def test_non_commands_return_none(self, text: str | None) -> None:
        assert parse_command(text) is None

    def test_team_may_follow_newline(self) -> None:
        cmd = parse_command("/ping\nteam1")
        assert cmd == PingCommand(mode=PingMode.TEAM, team="team1")


# ---------------------------------------------------------------------------
# parse_note_event
# ---------------------------------------------------------------------------


class TestParseNoteEvent:
    """Validation of webhook bodies as merge request notes."""

    def test_valid_merge_request_note(self, note_payload: Any) -> None:
        event = parse_note_event(note_payload("/ping team1"))

        assert event is not None
        assert event.project_id == 42
        assert event.merge_request.iid == 7
        assert event.object_attributes.note == "/ping team1"

    def test_wrong_object_kind_rejected(self, note_payload: Any) -> None:
        assert parse_note_event(note_payload(object_kind="merge_request")) is None

    def test_note_on_issue_rejected(self, note_payload: Any) -> None:
        assert parse_note_event(note_payload(noteable_type="Issue")) is None

    @pytest.mark.parametrize("payload", [None, [], "note", 42, {}])
    def test_non_mapping_or_empty_rejected(self, payload: Any) -> None:
        assert parse_note_event(payload) is None

    def test_missing_merge_request_rejected(self, note_payload: Any) -> None:
        payload = note_payload()
        del payload["merge_request"]
        assert parse_note_event(payload) is None

    def test_missing_project_id_rejected(self, note_payload: Any) -> None:
        payload = note_payload()
        del payload["project_id"]
        assert parse_note_event(payload) is None

    def test_title_and_url_optional(self, note_payload: Any) -> None:
        event = parse_note_event(note_payload(title=None, url=None))

        assert event is not None
        assert event.merge_request.title is None
        assert event.merge_request.url is None
