"""Tests for the default MIME parser."""

from collections.abc import Callable

import pytest

from mail_receiver.adapters.mime import EmailMimeParser
from mail_receiver.core.errors import EmailUnparsableError

RawEmail = Callable[[str], bytes]


@pytest.fixture
def parser() -> EmailMimeParser:
    """Create a MIME parser."""
    return EmailMimeParser()


class TestEmailMimeParser:
    """Tests for EmailMimeParser.parse."""

    def test_parse_reply(self, parser: EmailMimeParser, raw_email: RawEmail, reply_key: str) -> None:
        """Test parsing a plain-text reply."""
        message = parser.parse(raw_email("reply"))

        assert message.from_ == ("finn@example.com",)
        assert message.to == (f"reply+{reply_key}@mail.tracker.example.com",)
        assert message.references == (f"reply-{reply_key}@tracker.example.com",)
        assert message.subject == "Re: [group/project] Login page crashes (#42)"
        assert message.body.startswith("Reply text\n")
        assert message.attachments == ()

    def test_header_blob(self, parser: EmailMimeParser, raw_email: RawEmail) -> None:
        """Test that the raw header block is kept for marker checks."""
        message = parser.parse(raw_email("auto_reply"))

        assert "Auto-Submitted: auto-replied" in message.header
        assert "I am away" not in message.header

    def test_multiple_recipients_in_order(
        self, parser: EmailMimeParser, raw_email: RawEmail
    ) -> None:
        """Test that To addresses and references keep header order."""
        message = parser.parse(raw_email("reply_via_references"))

        assert message.to == ("support@tracker.example.com", "archive@example.com")
        assert message.references == (
            "thread-start@mail.example.com",
            "reply-59d8df8370b7e95c5a49fbf86aeb2c93@tracker.example.com",
        )

    def test_parse_text(self, parser: EmailMimeParser) -> None:
        """Test parsing a message given as text."""
        message = parser.parse("From: a@example.com, b@example.com\nSubject: Hi\n\nHello\n")

        assert message.from_ == ("a@example.com", "b@example.com")
        assert message.to == ()
        assert message.references == ()
        assert message.body == "Hello\n"

    def test_html_body(self, parser: EmailMimeParser, raw_email: RawEmail) -> None:
        """Test that HTML-only bodies are converted to text."""
        message = parser.parse(raw_email("html_reply"))

        assert message.body.strip() == "Reply from an HTML client"

    def test_html_blockquote_is_quoted(self, parser: EmailMimeParser) -> None:
        """Test that HTML blockquotes become quoted lines."""
        raw = (
            "From: a@example.com\n"
            "Content-Type: text/html; charset=UTF-8\n"
            "\n"
            "<div>Sounds good</div><blockquote><p>Original text</p></blockquote>\n"
        )
        message = parser.parse(raw)

        assert "Sounds good\n" in message.body
        assert "> Original text" in message.body

    def test_attachments(self, parser: EmailMimeParser, raw_email: RawEmail) -> None:
        """Test that attachments are collected with their decoded content."""
        message = parser.parse(raw_email("with_attachment"))

        assert message.body.strip() == "Screenshot attached"
        assert len(message.attachments) == 1
        attachment = message.attachments[0]
        assert attachment.filename == "screenshot.png"
        assert attachment.content_type == "image/png"
        assert attachment.content == b"\x89PNG\r\n\x1a\n"

    def test_unknown_charset(self, parser: EmailMimeParser, raw_email: RawEmail) -> None:
        """Test that an undecodable body raises EmailUnparsableError."""
        with pytest.raises(EmailUnparsableError):
            parser.parse(raw_email("bad_charset"))

    def test_invalid_bytes_in_declared_charset(self, parser: EmailMimeParser) -> None:
        """Test that bytes invalid in the declared charset raise EmailUnparsableError."""
        raw = (
            b"From: alice@example.com\n"
            b"To: reply+abc@mail.tracker.example.com\n"
            b"Content-Type: text/plain; charset=utf-8\n"
            b"\n"
            b"Reply \xff\xfe text\n"
        )

        with pytest.raises(EmailUnparsableError) as exc_info:
            parser.parse(raw)

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
