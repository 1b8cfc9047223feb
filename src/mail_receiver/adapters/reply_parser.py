"""Default quote stripper for plain-text replies."""

from __future__ import annotations

import re

from mail_receiver.models.message import ParsedMessage

# A line that starts the quoted or trailing part of a reply
REPLY_BOUNDARY_PATTERNS = (
    re.compile(r"^\s*>"),  # Quoted line
    re.compile(r"^On\b.+\bwrote:\s*$"),  # Attribution line
    re.compile(r"^-{2,}\s*Original Message\s*-{2,}\s*$", re.IGNORECASE),
    re.compile(r"^_{10,}\s*$"),  # Outlook separator
    re.compile(r"^From:\s.+@", re.IGNORECASE),  # Forwarded header block
    re.compile(r"^--\s*$"),  # Signature delimiter
)


class QuotedReplyStripper:
    """Keeps only the text above the first quoted or trailing section.

    Inline replies (answers interleaved with quoted text) lose everything
    after the first quote.

    Example:
        stripper = QuotedReplyStripper()
        stripper.extract_reply(message)  # "Reply text\n\n"
    """

    def extract_reply(self, message: ParsedMessage) -> str:
        """Return the text the author wrote above the quoted history."""
        return self.strip(message.body)

    def strip(self, body: str) -> str:
        """Strip quoted history from a plain-text body."""
        lines = body.replace("\r\n", "\n").split("\n")
        kept: list[str] = []
        for line in lines:
            if any(pattern.match(line) for pattern in REPLY_BOUNDARY_PATTERNS):
                break
            kept.append(line)
        return "\n".join(kept)
