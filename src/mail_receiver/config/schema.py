"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KEY_PLACEHOLDER = "%{key}"


class IncomingEmailConfig(BaseModel):
    """Reply-by-email configuration."""

    enabled: bool = False
    address: str | None = None  # e.g. "reply+%{key}@example.com"
    host: str = "localhost"  # Host part of fallback reply message-ids

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str | None) -> str | None:
        """Validate the reply address template."""
        if v is None:
            return v
        if v.count(KEY_PLACEHOLDER) != 1:
            raise ValueError(f"Reply address must contain {KEY_PLACEHOLDER} exactly once: {v}")
        if "@" not in v:
            raise ValueError(f"Invalid reply address: {v}")
        return v

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate the message-id host."""
        if not v or any(c.isspace() or c in "<>@" for c in v):
            raise ValueError(f"Invalid host: {v!r}")
        return v

    @model_validator(mode="after")
    def check_address_when_enabled(self) -> "IncomingEmailConfig":
        """Require a reply address when incoming email is enabled."""
        if self.enabled and self.address is None:
            raise ValueError("Incoming email enabled but no reply address configured")
        return self


class RejectionConfig(BaseModel):
    """Rejection notice configuration."""

    enabled: bool = True


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("/var/log/mail-receiver/receiver.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "json"
    file: FileLoggingConfig = FileLoggingConfig()
    redact_reply_keys: bool = Field(True, description="Mask reply keys in log output")


class ReceiverConfig(BaseSettings):
    """Root configuration for the mail receiver."""

    incoming_email: IncomingEmailConfig = IncomingEmailConfig()
    rejection: RejectionConfig = RejectionConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="MAIL_RECEIVER_",
        env_file=".env",
        env_nested_delimiter="__",
    )
