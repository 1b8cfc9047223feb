"""Data models for routing decisions."""

from dataclasses import dataclass
from enum import Enum

from .records import Project, SentNotification


class KeySource(Enum):
    """Header a routing key was recovered from."""

    TO = "to"
    REFERENCES = "references"


@dataclass(frozen=True)
class ResolvedKey:
    """A routing key together with where it was found."""

    key: str
    source: KeySource
    candidate: str  # The address or message-id the key was extracted from


class Route(Enum):
    """Processing path chosen for an inbound message."""

    REPLY = "reply"
    NEW_ITEM = "new_item"


@dataclass(frozen=True)
class RouteDecision:
    """The outcome of matching a routing key.

    Exactly one of ``sent_notification`` (for REPLY) or ``project``
    (for NEW_ITEM) is set.
    """

    route: Route
    key: str
    sent_notification: SentNotification | None = None
    project: Project | None = None
