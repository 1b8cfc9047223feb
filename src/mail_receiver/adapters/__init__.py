"""Default implementations of message content interfaces.

Available adapters:
- EmailMimeParser: MIME parsing with the standard library email package
- QuotedReplyStripper: Plain-text quote stripping
"""

from mail_receiver.adapters.mime import EmailMimeParser
from mail_receiver.adapters.reply_parser import QuotedReplyStripper

__all__ = ["EmailMimeParser", "QuotedReplyStripper"]
