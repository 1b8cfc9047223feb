"""Data transfer objects for downstream create calls."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NoteCreate:
    """Data for creating a note on an existing discussion."""

    note: str
    noteable_type: str | None
    noteable_id: int | None
    commit_id: str | None = None
    line_code: str | None = None


@dataclass(frozen=True)
class IssueCreate:
    """Data for creating a new issue."""

    title: str
    description: str


@dataclass(frozen=True)
class CreationResult:
    """Outcome reported by a note or issue creator."""

    persisted: bool
    errors: tuple[str, ...] = ()
    id: int | None = None
