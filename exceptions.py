"""Custom exception hierarchy for the YouTube E2E suite and its report generator."""
from __future__ import annotations

from typing import Any, Optional


class E2EError(Exception):
    """Base exception for all suite-related errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Report generation exceptions
class ReportError(E2EError):
    """Base exception for custom report generation errors."""

    pass


class MissingInputError(ReportError):
    """Raised when the run document does not exist."""

    def __init__(self, file_path: str):
        super().__init__(f"Report JSON not found at {file_path}", {"file_path": file_path})
        self.file_path = file_path


class MalformedInputError(ReportError):
    """Raised when the run document cannot be parsed or does not match the schema."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        details = {"file_path": file_path} if file_path else {}
        super().__init__(message, details)
        self.file_path = file_path


class ReportGenerationError(ReportError):
    """Raised when normalizing, rendering or writing the report fails unexpectedly."""

    pass


# Browser-related exceptions
class BrowserError(E2EError):
    """Base exception for browser automation errors."""

    pass


class NavigationError(BrowserError):
    """Raised when page navigation fails."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        details = {}
        if url:
            details["url"] = url
        if timeout:
            details["timeout"] = timeout
        super().__init__(message, details)
        self.url = url
        self.timeout = timeout


# Configuration exceptions
class ConfigurationError(E2EError):
    """Raised when configuration is invalid."""

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a required config file is not found."""

    def __init__(self, file_path: str):
        super().__init__(f"Configuration file not found: {file_path}", {"file_path": file_path})
        self.file_path = file_path
