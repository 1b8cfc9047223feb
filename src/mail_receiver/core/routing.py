"""Routing key resolution and route matching.

A routing key is recovered from the To header first and the References header
second, in header order; the first candidate that yields a key wins. The key
then selects either a pending conversation (reply) or a project (new issue).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import structlog

from mail_receiver.core.errors import RoutingNotFoundError
from mail_receiver.models.routing import KeySource, ResolvedKey, Route, RouteDecision

if TYPE_CHECKING:
    from mail_receiver.core.incoming_email import IncomingEmail
    from mail_receiver.interfaces.directory import ProjectResolver, SentNotificationStore
    from mail_receiver.models.message import ParsedMessage

log = structlog.get_logger()


def first_match(
    candidates: Iterable[str],
    extract: Callable[[str], str | None],
) -> tuple[str, str] | None:
    """Return ``(key, candidate)`` for the first candidate ``extract`` accepts."""
    for candidate in candidates:
        key = extract(candidate)
        if key is not None:
            return key, candidate
    return None


class RoutingKeyResolver:
    """Recovers the routing key from message headers.

    Example:
        resolver = RoutingKeyResolver(incoming_email)
        key = resolver.resolve(message)
    """

    def __init__(self, incoming_email: IncomingEmail) -> None:
        self._incoming_email = incoming_email

    def resolve_with_source(self, message: ParsedMessage) -> ResolvedKey | None:
        """Resolve the routing key and report which header it came from.

        Args:
            message: Parsed inbound message

        Returns:
            The resolved key, or None if no header carries one
        """
        match = first_match(message.to, self._incoming_email.key_from_address)
        if match is not None:
            return ResolvedKey(key=match[0], source=KeySource.TO, candidate=match[1])

        match = first_match(message.references, self._incoming_email.key_from_fallback_message_id)
        if match is not None:
            return ResolvedKey(key=match[0], source=KeySource.REFERENCES, candidate=match[1])

        return None

    def resolve(self, message: ParsedMessage) -> str | None:
        """Resolve the routing key only."""
        resolved = self.resolve_with_source(message)
        return resolved.key if resolved else None


class Router:
    """Matches a routing key to a pending conversation or a project."""

    def __init__(
        self,
        notifications: SentNotificationStore,
        projects: ProjectResolver,
    ) -> None:
        self._notifications = notifications
        self._projects = projects

    def route(self, key: str | None) -> RouteDecision:
        """Decide how a message with ``key`` is processed.

        A conversation match takes precedence over a project match.

        Args:
            key: Routing key, or None if the message carried none

        Returns:
            The route decision

        Raises:
            RoutingNotFoundError: If the key matches neither
        """
        if key is not None:
            sent_notification = self._notifications.find(key)
            if sent_notification is not None:
                return RouteDecision(
                    route=Route.REPLY,
                    key=key,
                    sent_notification=sent_notification,
                )

            project = self._projects.find_by_routing_key(key)
            if project is not None:
                return RouteDecision(route=Route.NEW_ITEM, key=key, project=project)

        # TODO: distinguish "project not found" from "sender cannot read project"
        log.debug("routing_not_found", has_key=key is not None)
        raise RoutingNotFoundError(
            "No conversation or project matches the routing key"
            if key is not None
            else "Message does not carry a routing key"
        )
