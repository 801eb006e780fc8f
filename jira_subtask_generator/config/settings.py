"""Configuration settings models using Pydantic."""

import re
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from jira_subtask_generator.exceptions import ConfigurationError

EMAIL_PATTERN = re.compile(r"^[^@\s<>(),;:]+@[^@\s<>(),;:]+\.[^@\s<>(),;:]+$")
MIN_TOKEN_LENGTH = 10

# Environment variable names for the Jira credentials
JIRA_ENV_VARS = {
    "url": "JIRA_URL",
    "email": "JIRA_EMAIL",
    "token": "JIRA_TOKEN",
}


class JiraSettings(BaseModel):
    """Jira Cloud connection configuration.

    Credentials default to empty so that settings can be loaded for a dry
    run; values that are set are validated.
    """

    url: str = Field(
        default="",
        description="Jira Cloud base URL (https://<site>.atlassian.net)",
    )
    email: str = Field(
        default="",
        description="Account email used for basic auth",
    )
    token: str = Field(
        default="",
        repr=False,
        description="Jira API token",
    )
    timeout: int = Field(
        default=30,
        ge=1,
        description="Request timeout in seconds",
    )
    retry_count: int = Field(
        default=3,
        ge=0,
        description="Number of retries for read requests",
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Base delay between retries in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate Jira URL is an https Atlassian Cloud URL."""
        v = v.strip()
        if not v:
            return v
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError("Jira URL is not a valid absolute URL")
        if parsed.scheme != "https":
            raise ValueError("Jira URL must use https")
        if not parsed.hostname.lower().endswith(".atlassian.net"):
            raise ValueError("Jira URL must be an Atlassian Cloud URL (*.atlassian.net)")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate account email."""
        v = v.strip()
        if v and not EMAIL_PATTERN.match(v):
            raise ValueError("Email is not valid")
        return v

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate API token length."""
        v = v.strip()
        if v and len(v) < MIN_TOKEN_LENGTH:
            raise ValueError("Token looks too short to be a valid Jira API token")
        return v

    def missing_fields(self) -> list[str]:
        """Get names of unset credential fields."""
        return [name for name in JIRA_ENV_VARS if not getattr(self, name)]


class BatchSettings(BaseModel):
    """Subtask creation configuration."""

    fail_fast: bool = Field(
        default=True,
        description="Stop on first failed subtask",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    file: str | None = Field(
        default=None,
        description="Log file path",
    )
    rotation: str = Field(
        default="10 MB",
        description="Log rotation size",
    )
    retention: str = Field(
        default="7 days",
        description="Log retention period",
    )
    compression: bool = Field(
        default=True,
        description="Whether to compress old logs",
    )
    console_format: str = Field(
        default="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        description="Console log format",
    )


class Settings(BaseModel):
    """Main configuration settings."""

    version: str = Field(
        default="1.0",
        description="Configuration version",
    )
    jira: JiraSettings = Field(default_factory=JiraSettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate configuration version."""
        supported_versions = ["1.0"]
        if v not in supported_versions:
            raise ValueError(f"Unsupported config version: {v}. Supported: {supported_versions}")
        return v

    def missing_jira_fields(self) -> list[str]:
        """Get environment variable names of unset Jira credentials."""
        return [JIRA_ENV_VARS[name] for name in self.jira.missing_fields()]

    def require_jira(self) -> JiraSettings:
        """Get Jira settings, ensuring all credentials are set.

        Raises:
            ConfigurationError: If any credential is missing
        """
        missing = self.missing_jira_fields()
        if missing:
            raise ConfigurationError(
                "JIRA_URL, JIRA_EMAIL, and JIRA_TOKEN must be set as environment "
                "variables or provided in a config file.",
                details={"missing": missing},
            )
        return self.jira
