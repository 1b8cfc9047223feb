"""Protocol definitions for the receiver's collaborators."""

from .directory import AuthorizationPolicy, ProjectResolver, SentNotificationStore, UserLookup
from .mail import AttachmentUploader, MimeParser, QuoteStripper, RejectionMailer
from .services import IssueCreator, NoteCreator

__all__ = [
    "AttachmentUploader",
    "AuthorizationPolicy",
    "IssueCreator",
    "MimeParser",
    "NoteCreator",
    "ProjectResolver",
    "QuoteStripper",
    "RejectionMailer",
    "SentNotificationStore",
    "UserLookup",
]
