"""Reply-address scheme for inbound email.

Notification emails are sent with a reply address built from a template such
as ``reply+%{key}@example.com`` and a Message-ID of the form
``reply-<key>@<host>``. Replies carry the key back either in the To header or,
when a relay rewrote the recipient, in the References header.
"""

from __future__ import annotations

import re

from mail_receiver.config.schema import KEY_PLACEHOLDER, IncomingEmailConfig


class IncomingEmail:
    """Builds and parses reply addresses and fallback message-ids.

    Example:
        incoming = IncomingEmail(IncomingEmailConfig(
            enabled=True, address="reply+%{key}@example.com", host="example.com"
        ))
        incoming.key_from_address("reply+abc123@example.com")  # "abc123"
    """

    def __init__(self, config: IncomingEmailConfig) -> None:
        self._config = config
        self._address_regex = self._build_address_regex()
        self._message_id_regex = re.compile(rf"reply-(.+)@{re.escape(config.host)}")

    @property
    def enabled(self) -> bool:
        """Whether replies by email are accepted."""
        return self._config.enabled and self._config.address is not None

    def reply_address(self, key: str) -> str:
        """Return the reply address that carries ``key``.

        Raises:
            ValueError: If no reply address is configured
        """
        if self._config.address is None:
            raise ValueError("No reply address configured")
        return self._config.address.replace(KEY_PLACEHOLDER, key)

    def message_id(self, key: str) -> str:
        """Return the fallback Message-ID that carries ``key``."""
        return f"reply-{key}@{self._config.host}"

    def key_from_address(self, address: str) -> str | None:
        """Extract the reply key from a recipient address."""
        if self._address_regex is None:
            return None
        match = self._address_regex.fullmatch(address.strip())
        return match.group(1) if match else None

    def key_from_fallback_message_id(self, message_id: str) -> str | None:
        """Extract the reply key from a referenced Message-ID."""
        match = self._message_id_regex.fullmatch(message_id.strip().strip("<>"))
        return match.group(1) if match else None

    def _build_address_regex(self) -> re.Pattern[str] | None:
        address = self._config.address
        if not self.enabled or address is None:
            return None
        pattern = re.escape(address).replace(re.escape(KEY_PLACEHOLDER), "(.+)")
        return re.compile(pattern)
