"""Abstract interfaces for handling message content."""

from typing import Protocol

from ..models.message import ParsedMessage, UploadedAttachment
from ..models.records import Project


class MimeParser(Protocol):
    """Decodes raw message bytes into a structured message."""

    def parse(self, raw: bytes | str) -> ParsedMessage:
        """
        Parse a raw RFC 822 message.

        Args:
            raw: Raw message as delivered by the mail transport

        Returns:
            The structured message

        Raises:
            EmailUnparsableError: If the message cannot be decoded
        """
        ...


class QuoteStripper(Protocol):
    """Separates the new reply text from quoted history."""

    def extract_reply(self, message: ParsedMessage) -> str:
        """
        Return only the text the author wrote in this message.

        Args:
            message: Parsed inbound message

        Returns:
            Reply text without quoted content (may be blank)
        """
        ...


class AttachmentUploader(Protocol):
    """Persists message attachments to a project's upload storage."""

    def process(self, message: ParsedMessage, project: Project) -> list[UploadedAttachment]:
        """
        Upload every attachment of the message.

        Args:
            message: Parsed inbound message
            project: Project the uploads belong to

        Returns:
            Uploaded attachments in the order they should be linked
        """
        ...


class RejectionMailer(Protocol):
    """Sends a rejection notice back to the author of a message."""

    def send_rejection(self, reason: str, raw: bytes | str, can_retry: bool) -> None:
        """
        Deliver a rejection notice.

        Args:
            reason: Human-readable explanation
            raw: The rejected raw message, for quoting back
            can_retry: Whether resending a corrected message may succeed
        """
        ...
