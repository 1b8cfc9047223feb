"""Authorization gate for acting users."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mail_receiver.core.errors import (
    UserBlockedError,
    UserNotAuthorizedError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from mail_receiver.interfaces.directory import AuthorizationPolicy
    from mail_receiver.models.records import Capability, Project, User

log = structlog.get_logger()


class AuthorizationGate:
    """Checks that a user may perform an action on a project.

    Checks run in a fixed order: existence, then blocked status, then
    capability. A blocked user is reported as blocked even when they also
    lack the capability.
    """

    def __init__(self, policy: AuthorizationPolicy) -> None:
        self._policy = policy

    def check(self, user: User | None, project: Project | None, capability: Capability) -> None:
        """Raise unless ``user`` holds ``capability`` on ``project``.

        Raises:
            UserNotFoundError: If there is no acting user
            UserBlockedError: If the user is blocked
            UserNotAuthorizedError: If the project is missing or the
                capability is not held
        """
        if user is None:
            raise UserNotFoundError

        if user.blocked:
            log.info("user_blocked", user_id=user.id)
            raise UserBlockedError

        if project is None or not self._policy.has_capability(user, project, capability):
            log.info(
                "user_not_authorized",
                user_id=user.id,
                project_id=project.id if project else None,
                capability=capability.value,
            )
            raise UserNotAuthorizedError
