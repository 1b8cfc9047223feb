"""Default MIME parser built on the standard library email package."""

from __future__ import annotations

import re
from collections.abc import Iterable
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser, Parser
from email.utils import getaddresses
from typing import cast

import structlog
from bs4 import BeautifulSoup

from mail_receiver.core.errors import EmailUnparsableError
from mail_receiver.models.message import MailAttachment, ParsedMessage

log = structlog.get_logger()

MESSAGE_ID_PATTERN = re.compile(r"<([^<>\s]+)>")


class EmailMimeParser:
    """Convert raw RFC 822 messages into :class:`ParsedMessage` instances."""

    def __init__(self) -> None:
        self._bytes_parser = BytesParser(policy=policy.default)
        self._text_parser = Parser(policy=policy.default)

    def parse(self, raw: bytes | str) -> ParsedMessage:
        """Parse a raw message.

        Raises:
            EmailUnparsableError: If a header or body cannot be decoded
        """
        try:
            if isinstance(raw, bytes):
                message = cast(EmailMessage, self._bytes_parser.parsebytes(raw))
            else:
                message = cast(EmailMessage, self._text_parser.parsestr(raw))

            return ParsedMessage(
                from_=tuple(_extract_addresses(message.get_all("From", []))),
                to=tuple(_extract_addresses(message.get_all("To", []))),
                references=tuple(_extract_message_ids(message.get_all("References", []))),
                subject=str(message.get("Subject", "")),
                header="".join(f"{name}: {value}\n" for name, value in message.raw_items()),
                body=_extract_body(message),
                attachments=tuple(_collect_attachments(message)),
            )
        except (UnicodeError, LookupError) as e:
            log.debug("email_decode_failed", error=str(e))
            raise EmailUnparsableError(str(e)) from e


def _extract_addresses(headers: Iterable[str]) -> Iterable[str]:
    for _, address in getaddresses([str(header) for header in headers]):
        if address:
            yield address


def _extract_message_ids(headers: Iterable[str]) -> Iterable[str]:
    for header in headers:
        value = str(header)
        yield from MESSAGE_ID_PATTERN.findall(value) or value.split()


def _extract_body(message: EmailMessage) -> str:
    part = message.get_body(preferencelist=("plain", "html"))
    if part is None:
        return ""
    content = part.get_content(errors="strict")
    if not isinstance(content, str):
        return ""
    if part.get_content_type() == "text/html":
        return _html_to_text(content)
    return content


def _html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for quote in soup.find_all("blockquote"):
        if quote.find_parent("blockquote") is None:
            quoted = "\n".join(f"> {line}" for line in quote.get_text().splitlines())
            quote.replace_with(f"\n{quoted}\n")
    for line_break in soup.find_all("br"):
        line_break.replace_with("\n")
    for block in soup.find_all(["p", "div", "li", "tr"]):
        block.append("\n")
    return soup.get_text()


def _collect_attachments(message: EmailMessage) -> Iterable[MailAttachment]:
    for part in message.iter_attachments():
        payload = part.get_payload(decode=True)
        yield MailAttachment(
            filename=part.get_filename(),
            content_type=part.get_content_type(),
            content=payload if isinstance(payload, bytes) else b"",
        )
