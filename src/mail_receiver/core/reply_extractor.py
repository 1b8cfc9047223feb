"""Extraction of the reply body from an inbound message."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mail_receiver.core.errors import EmptyReplyError

if TYPE_CHECKING:
    from mail_receiver.interfaces.mail import AttachmentUploader, QuoteStripper
    from mail_receiver.models.message import ParsedMessage
    from mail_receiver.models.records import Project

log = structlog.get_logger()


class ReplyExtractor:
    """Produces the body of a note or issue from a message.

    Quoted history is removed by the quote stripper; attachments are uploaded
    to the project and linked below the text in upload order. Uploading is a
    side effect, so extracting twice uploads twice.
    """

    def __init__(self, stripper: QuoteStripper, uploader: AttachmentUploader) -> None:
        self._stripper = stripper
        self._uploader = uploader

    def extract(self, message: ParsedMessage, project: Project) -> str:
        """Return the reply text with attachment links appended.

        Raises:
            EmptyReplyError: If nothing is left after stripping quotes
        """
        reply = self._stripper.extract_reply(message).strip()
        if not reply:
            raise EmptyReplyError("The reply is blank after removing quoted text")

        attachments = self._uploader.process(message, project)
        if attachments:
            log.debug("attachments_uploaded", count=len(attachments), project_id=project.id)

        return "".join([reply, *(f"\n\n{attachment.markdown}" for attachment in attachments)])
