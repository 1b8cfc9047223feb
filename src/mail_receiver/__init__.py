"""Mail receiver: routes inbound reply emails to notes and issues."""

from mail_receiver._version import __version__

__all__ = ["__version__"]
