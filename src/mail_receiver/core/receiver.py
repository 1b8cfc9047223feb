"""Inbound email receiver.

This module implements the Receiver class that decides what to do with one
raw inbound email:
1. Reject blank input
2. Parse the message
3. Resolve the routing key (To header, then References)
4. Route to a pending conversation (reply) or a project (new issue)
5. Authorize the acting user
6. Extract the reply body and upload attachments
7. Create the note or issue

Every rejection is raised as a ProcessingError subclass. Nothing is persisted
before authorization has succeeded.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, cast

import structlog

from mail_receiver.core.authorization import AuthorizationGate
from mail_receiver.core.errors import (
    AutoGeneratedEmailError,
    EmailUnparsableError,
    EmptyInputError,
    InvalidIssueError,
    InvalidNoteError,
    NoteableNotFoundError,
)
from mail_receiver.core.incoming_email import IncomingEmail
from mail_receiver.core.reply_extractor import ReplyExtractor
from mail_receiver.core.routing import Router, RoutingKeyResolver
from mail_receiver.models.records import Capability, Project, User
from mail_receiver.models.results import IssueCreate, NoteCreate
from mail_receiver.models.routing import Route

if TYPE_CHECKING:
    from mail_receiver.config.schema import ReceiverConfig
    from mail_receiver.interfaces.directory import (
        AuthorizationPolicy,
        ProjectResolver,
        SentNotificationStore,
        UserLookup,
    )
    from mail_receiver.interfaces.mail import AttachmentUploader, MimeParser, QuoteStripper
    from mail_receiver.interfaces.services import IssueCreator, NoteCreator
    from mail_receiver.models.message import ParsedMessage
    from mail_receiver.models.records import SentNotification

log = structlog.get_logger()

AUTO_GENERATED_PATTERN = re.compile(r"auto-(generated|replied)", re.IGNORECASE)


class Receiver:
    """Routes one raw inbound email to a note or an issue.

    The receiver keeps no state between calls; every call to execute()
    starts from the raw message.

    Example:
        receiver = Receiver(parser, incoming_email, notifications, projects,
                            users, policy, stripper, uploader, notes, issues)
        receiver.execute(raw_bytes)
    """

    def __init__(
        self,
        parser: MimeParser,
        incoming_email: IncomingEmail,
        notifications: SentNotificationStore,
        projects: ProjectResolver,
        users: UserLookup,
        policy: AuthorizationPolicy,
        stripper: QuoteStripper,
        uploader: AttachmentUploader,
        notes: NoteCreator,
        issues: IssueCreator,
    ) -> None:
        """Initialize the Receiver.

        Args:
            parser: Decodes raw messages
            incoming_email: Reply-address scheme used to find routing keys
            notifications: Sent notification lookup for replies
            projects: Project lookup for new issues
            users: User lookup by sender address
            policy: Capability checks
            stripper: Removes quoted history from bodies
            uploader: Uploads attachments
            notes: Creates notes
            issues: Creates issues
        """
        self._parser = parser
        self._users = users
        self._notes = notes
        self._issues = issues

        self._resolver = RoutingKeyResolver(incoming_email)
        self._router = Router(notifications, projects)
        self._gate = AuthorizationGate(policy)
        self._extractor = ReplyExtractor(stripper, uploader)

    def execute(self, raw: bytes | str) -> None:
        """Process a raw inbound email.

        Args:
            raw: Raw message as delivered by the mail transport

        Raises:
            ProcessingError: If the message is rejected
        """
        if not raw or not raw.strip():
            raise EmptyInputError("The email is empty")

        message = self._parse(raw)

        resolved = self._resolver.resolve_with_source(message)
        decision = self._router.route(resolved.key if resolved else None)

        log.info(
            "email_routed",
            route=decision.route.value,
            key_source=resolved.source.value if resolved else None,
        )

        if decision.route is Route.REPLY:
            self._process_reply(message, cast("SentNotification", decision.sent_notification))
        else:
            self._process_create_issue(message, cast(Project, decision.project))

    def _parse(self, raw: bytes | str) -> ParsedMessage:
        try:
            return self._parser.parse(raw)
        except (UnicodeError, LookupError) as e:
            raise EmailUnparsableError(str(e)) from e

    def _process_reply(self, message: ParsedMessage, sent_notification: SentNotification) -> None:
        """Create a note on the conversation the message replies to."""
        if AUTO_GENERATED_PATTERN.search(message.header):
            raise AutoGeneratedEmailError("The email is marked as auto-generated")

        author = sent_notification.recipient
        project = sent_notification.project

        self._gate.check(author, project, Capability.CREATE_NOTE)
        author = cast(User, author)
        project = cast(Project, project)

        if sent_notification.noteable_reference is None:
            raise NoteableNotFoundError("The discussion no longer exists")

        note = NoteCreate(
            note=self._extractor.extract(message, project),
            noteable_type=sent_notification.noteable_type,
            noteable_id=sent_notification.noteable_id,
            commit_id=sent_notification.commit_id,
            line_code=sent_notification.line_code,
        )
        result = self._notes.create_note(project, author, note)

        if not result.persisted:
            log.info("note_rejected", project_id=project.id, errors=len(result.errors))
            raise InvalidNoteError(result.errors)

        log.info("note_created", project_id=project.id, note_id=result.id)

    def _process_create_issue(self, message: ParsedMessage, project: Project) -> None:
        """Open a new issue in the project the message was sent to."""
        author = self._find_sender(message)

        self._gate.check(author, project, Capability.CREATE_ISSUE)
        author = cast(User, author)

        issue = IssueCreate(
            title=message.subject,
            description=self._extractor.extract(message, project),
        )
        result = self._issues.create_issue(project, author, issue)

        if not result.persisted:
            log.info("issue_rejected", project_id=project.id, errors=len(result.errors))
            raise InvalidIssueError(result.errors)

        log.info("issue_created", project_id=project.id, issue_id=result.id)

    # TODO: the From header can be forged; verify the sender with a token
    # carried in the project's incoming address.
    def _find_sender(self, message: ParsedMessage) -> User | None:
        """Return the user owning the first From address that resolves."""
        for address in message.from_:
            user = self._users.find_by_any_email(address)
            if user is not None:
                return user
        return None


def create_receiver(
    config: ReceiverConfig,
    *,
    notifications: SentNotificationStore,
    projects: ProjectResolver,
    users: UserLookup,
    policy: AuthorizationPolicy,
    uploader: AttachmentUploader,
    notes: NoteCreator,
    issues: IssueCreator,
    parser: MimeParser | None = None,
    stripper: QuoteStripper | None = None,
) -> Receiver:
    """Factory function to create a Receiver from configuration.

    The default MIME parser and quote stripper are used unless replacements
    are given.

    Args:
        config: Receiver configuration
        notifications: Sent notification lookup
        projects: Project lookup
        users: User lookup
        policy: Capability checks
        uploader: Attachment uploader
        notes: Note creator
        issues: Issue creator
        parser: MIME parser override
        stripper: Quote stripper override

    Returns:
        Configured Receiver instance
    """
    from mail_receiver.adapters.mime import EmailMimeParser
    from mail_receiver.adapters.reply_parser import QuotedReplyStripper

    return Receiver(
        parser=parser or EmailMimeParser(),
        incoming_email=IncomingEmail(config.incoming_email),
        notifications=notifications,
        projects=projects,
        users=users,
        policy=policy,
        stripper=stripper or QuotedReplyStripper(),
        uploader=uploader,
        notes=notes,
        issues=issues,
    )
