"""Abstract interfaces for looking up users, projects and notifications."""

from typing import Protocol

from ..models.records import Capability, Project, SentNotification, User


class UserLookup(Protocol):
    """Finds platform users by email address."""

    def find_by_any_email(self, address: str) -> User | None:
        """
        Find a user by primary or secondary email address.

        Args:
            address: Email address to look up

        Returns:
            The matching user, None if no user owns the address
        """
        ...


class AuthorizationPolicy(Protocol):
    """Answers capability questions for a user on a project.

    The receiver only asks questions through this interface; what a
    capability means is decided by the implementation.
    """

    def has_capability(self, user: User, project: Project, capability: Capability) -> bool:
        """
        Check whether a user may perform an action on a project.

        Args:
            user: Acting user
            project: Target project
            capability: Capability required by the action

        Returns:
            True if the user holds the capability
        """
        ...


class ProjectResolver(Protocol):
    """Resolves projects addressed directly by a routing key."""

    def find_by_routing_key(self, key: str) -> Project | None:
        """
        Find a project whose full namespace path equals the key.

        Args:
            key: Routing key (e.g., "group/project")

        Returns:
            The project if found, None otherwise
        """
        ...


class SentNotificationStore(Protocol):
    """Read-only access to previously sent notifications."""

    def find(self, reply_key: str) -> SentNotification | None:
        """
        Find the notification that was sent with a reply key.

        Args:
            reply_key: Key embedded in the notification's reply address

        Returns:
            The sent notification if found, None otherwise
        """
        ...
