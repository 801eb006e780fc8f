"""Exception classes for jira_subtask_generator."""

from typing import Any


class JiraSubtaskGeneratorError(Exception):
    """Base exception class for jira_subtask_generator."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(JiraSubtaskGeneratorError):
    """Configuration related errors."""


class InputFileError(JiraSubtaskGeneratorError):
    """Subtask file could not be read or used."""


class BatchParseError(InputFileError):
    """Subtask file content is not a valid batch."""

    def __init__(self, message: str, file_path: str | None = None):
        self.file_path = file_path
        super().__init__(
            message,
            details={"file": file_path} if file_path else None,
        )


class JiraConnectionError(JiraSubtaskGeneratorError):
    """Jira connection errors."""


class JiraApiError(JiraSubtaskGeneratorError):
    """Jira REST API returned an error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.body = body
        merged = {"status_code": status_code} if status_code is not None else {}
        merged.update(details or {})
        super().__init__(message, details=merged)


class NoSubtaskIssueTypeError(JiraSubtaskGeneratorError):
    """Project has no subtask-capable issue type."""
