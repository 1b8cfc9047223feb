"""Shared test fixtures for the mail receiver."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mail_receiver.adapters.mime import EmailMimeParser
from mail_receiver.adapters.reply_parser import QuotedReplyStripper
from mail_receiver.config.schema import IncomingEmailConfig
from mail_receiver.core.incoming_email import IncomingEmail
from mail_receiver.core.receiver import Receiver
from mail_receiver.models.message import UploadedAttachment
from mail_receiver.models.records import Project, SentNotification, User
from mail_receiver.models.results import CreationResult

# Get the fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
EMAILS_DIR = FIXTURES_DIR / "emails"

REPLY_KEY = "59d8df8370b7e95c5a49fbf86aeb2c93"


def load_email(name: str) -> bytes:
    """Load a raw email fixture by file stem."""
    return (EMAILS_DIR / f"{name}.eml").read_bytes()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def reply_key() -> str:
    """Reply key carried by the reply fixtures."""
    return REPLY_KEY


@pytest.fixture
def raw_email() -> Callable[[str], bytes]:
    """Return a loader for raw email fixtures."""
    return load_email


@pytest.fixture
def incoming_email_config() -> IncomingEmailConfig:
    """Reply-by-email settings matching the email fixtures."""
    return IncomingEmailConfig(
        enabled=True,
        address="reply+%{key}@mail.tracker.example.com",
        host="tracker.example.com",
    )


@pytest.fixture
def incoming_email(incoming_email_config: IncomingEmailConfig) -> IncomingEmail:
    """Reply-address scheme matching the email fixtures."""
    return IncomingEmail(incoming_email_config)


@pytest.fixture
def project() -> Project:
    """The project the fixtures talk about."""
    return Project(id=7, path_with_namespace="group/project")


@pytest.fixture
def recipient() -> User:
    """The user a notification was sent to."""
    return User(id=1, username="finn")


@pytest.fixture
def sender() -> User:
    """The user behind alice@example.com."""
    return User(id=2, username="alice")


@pytest.fixture
def sent_notification(recipient: User, project: Project) -> SentNotification:
    """A notification sent for a comment on issue #42."""
    return SentNotification(
        reply_key=REPLY_KEY,
        recipient=recipient,
        project=project,
        noteable_type="Issue",
        noteable_id=42,
        noteable_reference="group/project#42",
    )


@pytest.fixture
def notifications(sent_notification: SentNotification) -> MagicMock:
    """Notification store that knows only the fixture reply key."""
    store = MagicMock()
    store.find.side_effect = lambda key: sent_notification if key == REPLY_KEY else None
    return store


@pytest.fixture
def projects(project: Project) -> MagicMock:
    """Project resolver that knows only group/project."""
    resolver = MagicMock()
    resolver.find_by_routing_key.side_effect = lambda key: (
        project if key == project.path_with_namespace else None
    )
    return resolver


@pytest.fixture
def users(sender: User) -> MagicMock:
    """User lookup that knows only alice@example.com."""
    lookup = MagicMock()
    lookup.find_by_any_email.side_effect = lambda address: (
        sender if address == "alice@example.com" else None
    )
    return lookup


@pytest.fixture
def policy() -> MagicMock:
    """Authorization policy that grants every capability."""
    mock = MagicMock()
    mock.has_capability.return_value = True
    return mock


@pytest.fixture
def uploader() -> MagicMock:
    """Attachment uploader that uploads nothing."""
    mock = MagicMock()
    mock.process.return_value = []
    return mock


@pytest.fixture
def notes() -> MagicMock:
    """Note creator that persists everything."""
    mock = MagicMock()
    mock.create_note.return_value = CreationResult(persisted=True, id=100)
    return mock


@pytest.fixture
def issues() -> MagicMock:
    """Issue creator that persists everything."""
    mock = MagicMock()
    mock.create_issue.return_value = CreationResult(persisted=True, id=200)
    return mock


@pytest.fixture
def receiver(
    incoming_email: IncomingEmail,
    notifications: MagicMock,
    projects: MagicMock,
    users: MagicMock,
    policy: MagicMock,
    uploader: MagicMock,
    notes: MagicMock,
    issues: MagicMock,
) -> Receiver:
    """Receiver wired to the default parser/stripper and mocked services."""
    return Receiver(
        parser=EmailMimeParser(),
        incoming_email=incoming_email,
        notifications=notifications,
        projects=projects,
        users=users,
        policy=policy,
        stripper=QuotedReplyStripper(),
        uploader=uploader,
        notes=notes,
        issues=issues,
    )


@pytest.fixture
def two_attachments() -> list[UploadedAttachment]:
    """Two uploaded attachments in upload order."""
    return [
        UploadedAttachment(markdown="![one](/uploads/1/one.png)"),
        UploadedAttachment(markdown="[two.pdf](/uploads/2/two.pdf)"),
    ]
