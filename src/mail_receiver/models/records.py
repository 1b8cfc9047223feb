"""Read-only records supplied by the platform's directory services."""

from dataclasses import dataclass
from enum import Enum


class Capability(Enum):
    """A named permission checked against a user/project pair."""

    CREATE_NOTE = "create_note"
    CREATE_ISSUE = "create_issue"


@dataclass(frozen=True)
class User:
    """A platform user that can act on inbound email."""

    id: int
    username: str
    blocked: bool = False


@dataclass(frozen=True)
class Project:
    """A project that notes and issues belong to."""

    id: int
    path_with_namespace: str  # e.g. "group/project"


@dataclass(frozen=True)
class SentNotification:
    """The record left behind when a notification email was sent.

    Looked up by the reply key embedded in the notification's reply address.
    ``noteable_reference`` is ``None`` when the discussion it pointed at no
    longer exists.
    """

    reply_key: str
    recipient: User | None
    project: Project | None
    noteable_type: str | None
    noteable_id: int | None
    commit_id: str | None = None
    line_code: str | None = None
    noteable_reference: str | None = None
