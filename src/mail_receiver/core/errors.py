"""Error taxonomy for inbound email processing.

Every way an inbound message can be rejected maps to exactly one subclass of
:class:`ProcessingError`. All of them are permanent for a given input: the
receiver never retries, and the delivery handler decides whether to send a
rejection notice based on the error kind.
"""

from __future__ import annotations

from collections.abc import Sequence


class ProcessingError(Exception):
    """Base exception for all inbound email rejections.

    Attributes:
        detail: Optional human-readable detail about the failure.
    """

    kind = "processing_error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or "")
        self.detail = detail


class EmptyInputError(ProcessingError):
    """The raw message was empty or contained only whitespace."""

    kind = "empty_input"


class EmailUnparsableError(ProcessingError):
    """The raw message could not be decoded into a structured message."""

    kind = "email_unparsable"


class RoutingNotFoundError(ProcessingError):
    """No conversation or project matched the message's routing key."""

    kind = "routing_not_found"


class UserNotFoundError(ProcessingError):
    """No user corresponds to the message."""

    kind = "user_not_found"


class UserBlockedError(ProcessingError):
    """The acting user is blocked."""

    kind = "user_blocked"


class UserNotAuthorizedError(ProcessingError):
    """The acting user lacks the capability on the target project."""

    kind = "user_not_authorized"


class AutoGeneratedEmailError(ProcessingError):
    """The message carries an auto-generated or auto-replied header marker."""

    kind = "auto_generated_email"


class NoteableNotFoundError(ProcessingError):
    """The discussion the reply belongs to no longer exists."""

    kind = "noteable_not_found"


class EmptyReplyError(ProcessingError):
    """Nothing was left of the body after stripping quoted content."""

    kind = "empty_reply"


def format_validation_errors(header: str, errors: Sequence[str]) -> str:
    """Render validation messages under a header, one bullet per message."""
    return header + "".join(f"\n\n- {error}" for error in errors)


class _ValidationFailure(ProcessingError):
    """A downstream create call rejected the content."""

    header = "The record could not be created for the following reasons:"

    def __init__(self, errors: Sequence[str] = ()) -> None:
        self.errors = tuple(errors)
        super().__init__(format_validation_errors(self.header, self.errors))


class InvalidNoteError(_ValidationFailure):
    """The note could not be persisted.

    Attributes:
        errors: Validation messages returned by the note creator.
    """

    kind = "invalid_note"
    header = "The comment could not be created for the following reasons:"


class InvalidIssueError(_ValidationFailure):
    """The issue could not be persisted.

    Attributes:
        errors: Validation messages returned by the issue creator.
    """

    kind = "invalid_issue"
    header = "The issue could not be created for the following reasons:"


__all__ = [
    "AutoGeneratedEmailError",
    "EmailUnparsableError",
    "EmptyInputError",
    "EmptyReplyError",
    "InvalidIssueError",
    "InvalidNoteError",
    "NoteableNotFoundError",
    "ProcessingError",
    "RoutingNotFoundError",
    "UserBlockedError",
    "UserNotAuthorizedError",
    "UserNotFoundError",
    "format_validation_errors",
]
