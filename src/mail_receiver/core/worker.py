"""Delivery handler that runs the receiver and answers rejected mail.

The worker is what a mail transport calls for every inbound message. It turns
ProcessingError kinds into rejection notices for the author; other exceptions
(transient collaborator failures) are left to the caller to retry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mail_receiver.core.errors import (
    AutoGeneratedEmailError,
    EmailUnparsableError,
    EmptyInputError,
    EmptyReplyError,
    InvalidIssueError,
    InvalidNoteError,
    NoteableNotFoundError,
    ProcessingError,
    RoutingNotFoundError,
    UserBlockedError,
    UserNotAuthorizedError,
    UserNotFoundError,
)
from mail_receiver.models.delivery import DeliveryOutcome, Rejection
from mail_receiver.utils.logging import bind_context, clear_context

if TYPE_CHECKING:
    from mail_receiver.core.receiver import Receiver
    from mail_receiver.interfaces.mail import RejectionMailer

log = structlog.get_logger()

BLANK_EMAIL_REASON = (
    "It appears that the email is blank. Make sure your reply is at the top of the email, "
    "we can't process inline replies."
)

REJECTION_REASONS: dict[type[ProcessingError], Rejection] = {
    RoutingNotFoundError: Rejection(
        "We couldn't figure out what the email is in reply to. "
        "Please create your comment through the web interface."
    ),
    EmptyInputError: Rejection(BLANK_EMAIL_REASON, can_retry=True),
    EmptyReplyError: Rejection(BLANK_EMAIL_REASON, can_retry=True),
    AutoGeneratedEmailError: Rejection(
        "The email was marked as 'auto generated', which we can't accept. "
        "Please create your comment through the web interface."
    ),
    UserNotFoundError: Rejection(
        "We couldn't figure out what user corresponds to the email. "
        "Please create your comment through the web interface."
    ),
    UserBlockedError: Rejection(
        "Your account has been blocked. If you believe this is in error, contact a staff member."
    ),
    UserNotAuthorizedError: Rejection(
        "You are not allowed to respond to the thread you are replying to. "
        "If you believe this is in error, contact a staff member."
    ),
    NoteableNotFoundError: Rejection(
        "The thread you are replying to no longer exists, perhaps it was deleted? "
        "If you believe this is in error, contact a staff member."
    ),
}


def rejection_for(error: ProcessingError) -> Rejection | None:
    """Return the notice to send for ``error``, or None to stay silent.

    Unparsable mail is never answered.
    """
    if isinstance(error, EmailUnparsableError):
        return None
    if isinstance(error, (InvalidNoteError, InvalidIssueError)):
        return Rejection(str(error), can_retry=True)
    return REJECTION_REASONS.get(type(error))


class ReceiverWorker:
    """Runs the receiver for one raw message at a time.

    Example:
        worker = ReceiverWorker(receiver, mailer)
        outcome = worker.perform(raw_bytes)
    """

    def __init__(
        self,
        receiver: Receiver,
        mailer: RejectionMailer | None = None,
        send_rejections: bool = True,
    ) -> None:
        """Initialize the worker.

        Args:
            receiver: Receiver that processes messages
            mailer: Sends rejection notices (none are sent if omitted)
            send_rejections: Whether to send rejection notices at all
        """
        self._receiver = receiver
        self._mailer = mailer
        self._send_rejections = send_rejections

    def perform(self, raw: bytes | str) -> DeliveryOutcome:
        """Process a raw message and answer it if it is rejected.

        Args:
            raw: Raw message as delivered by the mail transport

        Returns:
            What happened to the message
        """
        clear_context()
        bind_context(raw_size=len(raw))

        try:
            self._receiver.execute(raw)
        except ProcessingError as e:
            rejection = rejection_for(e)
            log.warning(
                "email_rejected",
                error_kind=e.kind,
                detail=e.detail,
                can_retry=rejection.can_retry if rejection else None,
            )
            if rejection is not None:
                self._send(rejection, raw)
            return DeliveryOutcome(processed=False, error_kind=e.kind, rejection=rejection)

        log.info("email_processed")
        return DeliveryOutcome(processed=True)

    def _send(self, rejection: Rejection, raw: bytes | str) -> None:
        if self._mailer is None or not self._send_rejections:
            log.debug("rejection_not_sent", reason=rejection.reason)
            return
        self._mailer.send_rejection(rejection.reason, raw, rejection.can_retry)
