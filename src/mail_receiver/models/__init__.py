"""Data models and transfer objects."""

from .delivery import DeliveryOutcome, Rejection
from .message import MailAttachment, ParsedMessage, UploadedAttachment
from .records import Capability, Project, SentNotification, User
from .results import CreationResult, IssueCreate, NoteCreate
from .routing import KeySource, ResolvedKey, Route, RouteDecision

__all__ = [
    # Message models
    "MailAttachment",
    "ParsedMessage",
    "UploadedAttachment",
    # Directory records
    "Capability",
    "Project",
    "SentNotification",
    "User",
    # Create calls
    "CreationResult",
    "IssueCreate",
    "NoteCreate",
    # Routing
    "KeySource",
    "ResolvedKey",
    "Route",
    "RouteDecision",
    # Delivery
    "DeliveryOutcome",
    "Rejection",
]
