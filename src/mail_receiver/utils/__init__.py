"""Utility functions and helpers.

- logging: Structured logging with reply key redaction
"""

from mail_receiver.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    redact_reply_keys,
)

__all__ = [
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "redact_reply_keys",
]
