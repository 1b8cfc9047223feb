"""Data models for parsed inbound email."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MailAttachment:
    """A file attached to an inbound message."""

    filename: str | None
    content_type: str
    content: bytes


@dataclass(frozen=True)
class ParsedMessage:
    """A structured view of a raw inbound message.

    Address and reference sequences keep the order in which they appear in
    the message headers; routing depends on that order.
    """

    from_: tuple[str, ...]
    to: tuple[str, ...]
    references: tuple[str, ...]
    subject: str
    header: str  # Raw header block, used for auto-generated detection
    body: str
    attachments: tuple[MailAttachment, ...] = ()


@dataclass(frozen=True)
class UploadedAttachment:
    """An attachment after upload, ready to be linked from a note or issue."""

    markdown: str  # Display-ready reference, e.g. ![name](url)
