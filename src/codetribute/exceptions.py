"""Custom exceptions for codetribute.

All exceptions inherit from CodetributeError, allowing callers to catch
every pipeline error with a single except clause if desired.

Exception hierarchy:
    CodetributeError (base)
    ├── ConfigurationError
    │   └── ValidationError
    ├── UninitializedError
    ├── AuthenticationError
    └── PublishError
"""

from pathlib import Path
from typing import Any


class CodetributeError(Exception):
    """Base exception for all codetribute errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CodetributeError):
    """Raised when configuration is invalid or a startup precondition fails.

    Examples:
        - Invalid YAML syntax in config file
        - Workspace root missing or not a directory
    """

    def __init__(
        self,
        message: str,
        config_file: Path | None = None,
        key: str | None = None,
    ):
        """Initialize configuration error.

        Args:
            message: Error description.
            config_file: Path to the problematic config file.
            key: The configuration key that caused the error.
        """
        details = {}
        if config_file:
            details["config_file"] = str(config_file)
        if key:
            details["key"] = key
        super().__init__(message, details)
        self.config_file = config_file
        self.key = key


class ValidationError(ConfigurationError):
    """Raised when configuration values fail validation."""

    def __init__(
        self,
        message: str,
        field: str,
        value: Any = None,
        expected: str | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error description.
            field: The field that failed validation.
            value: The invalid value (will be truncated if too long).
            expected: Description of expected value format.
        """
        super().__init__(message)
        self.details["field"] = field
        if value is not None:
            value_str = str(value)
            self.details["value"] = value_str[:100] + "..." if len(value_str) > 100 else value_str
        if expected:
            self.details["expected"] = expected
        self.field = field
        self.value = value
        self.expected = expected


# =============================================================================
# Runtime Errors
# =============================================================================


class UninitializedError(CodetributeError):
    """Raised when a collaborator is used before its client is configured.

    The summarizer raises this when no API key was ever provided.
    """

    def __init__(self, message: str, component: str | None = None):
        details = {"component": component} if component else None
        super().__init__(message, details)
        self.component = component


class AuthenticationError(CodetributeError):
    """Raised when the auth collaborator cannot produce a usable session."""


class PublishError(CodetributeError):
    """Raised when the remote store rejects a publish operation.

    Attributes:
        status_code: HTTP status returned by the remote store, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.status_code = status_code
        self.path = path
