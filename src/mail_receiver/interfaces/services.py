"""Abstract interfaces for persisting notes and issues."""

from typing import Protocol

from ..models.records import Project, User
from ..models.results import CreationResult, IssueCreate, NoteCreate


class NoteCreator(Protocol):
    """Creates notes on existing discussions."""

    def create_note(self, project: Project, author: User, note: NoteCreate) -> CreationResult:
        """
        Create a note.

        Args:
            project: Project the discussion belongs to
            author: User the note is attributed to
            note: Note body and threading metadata

        Returns:
            Whether the note was persisted, with validation messages if not
        """
        ...


class IssueCreator(Protocol):
    """Creates new issues in a project."""

    def create_issue(self, project: Project, author: User, issue: IssueCreate) -> CreationResult:
        """
        Create an issue.

        Args:
            project: Target project
            author: User the issue is attributed to
            issue: Issue title and description

        Returns:
            Whether the issue was persisted, with validation messages if not
        """
        ...
