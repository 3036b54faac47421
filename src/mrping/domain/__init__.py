"""Domain models and errors for the merge request ping relay."""

from mrping.domain.errors import (
    MergeRequestUnavailableError,
    NotificationError,
    RelayError,
    TeamConfigError,
)
from mrping.domain.models import (
    MergeRequestDetails,
    MergeRequestRef,
    NoteAttributes,
    NoteEvent,
    PingCommand,
    PingMode,
    ResolvedMention,
    Reviewer,
)

__all__ = [
    "MergeRequestDetails",
    "MergeRequestRef",
    "MergeRequestUnavailableError",
    "NoteAttributes",
    "NoteEvent",
    "NotificationError",
    "PingCommand",
    "PingMode",
    "RelayError",
    "ResolvedMention",
    "Reviewer",
    "TeamConfigError",
]
