"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    KEY_PLACEHOLDER,
    FileLoggingConfig,
    IncomingEmailConfig,
    LoggingConfig,
    ReceiverConfig,
    RejectionConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "ReceiverConfig",
    # Sections
    "IncomingEmailConfig",
    "RejectionConfig",
    "LoggingConfig",
    "FileLoggingConfig",
    "KEY_PLACEHOLDER",
]
