"""Tests for reply body extraction."""

from unittest.mock import MagicMock

import pytest

from mail_receiver.adapters.reply_parser import QuotedReplyStripper
from mail_receiver.core.errors import EmptyReplyError
from mail_receiver.core.reply_extractor import ReplyExtractor
from mail_receiver.models.message import ParsedMessage, UploadedAttachment
from mail_receiver.models.records import Project


def make_message(body: str) -> ParsedMessage:
    """Build a parsed message with the given body."""
    return ParsedMessage(
        from_=("finn@example.com",),
        to=("reply+abc@mail.tracker.example.com",),
        references=(),
        subject="Re: thread",
        header="",
        body=body,
    )


class TestReplyExtractor:
    """Tests for ReplyExtractor.extract."""

    def test_strips_quotes(self, uploader: MagicMock, project: Project) -> None:
        """Test that quoted history is removed."""
        extractor = ReplyExtractor(QuotedReplyStripper(), uploader)

        body = extractor.extract(make_message("Reply text\n\n> quoted original"), project)

        assert body == "Reply text"

    def test_appends_attachments_in_order(
        self,
        uploader: MagicMock,
        project: Project,
        two_attachments: list[UploadedAttachment],
    ) -> None:
        """Test that attachment links are appended after a blank line each."""
        uploader.process.return_value = two_attachments
        extractor = ReplyExtractor(QuotedReplyStripper(), uploader)
        message = make_message("Reply text\n\n> quoted original")

        body = extractor.extract(message, project)

        assert body == (
            "Reply text\n\n![one](/uploads/1/one.png)\n\n[two.pdf](/uploads/2/two.pdf)"
        )
        uploader.process.assert_called_once_with(message, project)

    def test_trims_whitespace(self, uploader: MagicMock, project: Project) -> None:
        """Test that surrounding whitespace is trimmed."""
        stripper = MagicMock()
        stripper.extract_reply.return_value = "\n\n   Thanks!  \n\n"

        body = ReplyExtractor(stripper, uploader).extract(make_message("ignored"), project)

        assert body == "Thanks!"

    @pytest.mark.parametrize("reply", ["", "   ", "\n\t\n"])
    def test_blank_reply_rejected(
        self, uploader: MagicMock, project: Project, reply: str
    ) -> None:
        """Test that a blank reply is rejected before uploading."""
        stripper = MagicMock()
        stripper.extract_reply.return_value = reply

        with pytest.raises(EmptyReplyError):
            ReplyExtractor(stripper, uploader).extract(make_message("> quoted"), project)

        uploader.process.assert_not_called()

    def test_uploads_on_every_call(self, uploader: MagicMock, project: Project) -> None:
        """Test that each extraction uploads attachments again."""
        extractor = ReplyExtractor(QuotedReplyStripper(), uploader)
        message = make_message("Reply text")

        extractor.extract(message, project)
        extractor.extract(message, project)

        assert uploader.process.call_count == 2
