"""Data models for the delivery handler."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rejection:
    """A notice to send back to the author of a rejected message."""

    reason: str
    can_retry: bool = False


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of handing one raw message to the receiver."""

    processed: bool
    error_kind: str | None = None
    rejection: Rejection | None = None
