"""Error handling for the GameHunt catalog client.

This module provides:
- Exception classes for the catalog API failure kinds (network, HTTP, decode)
- Configuration and validation errors
- User-friendly error messages with suggested actions
- A centralized error handling service used at the repository boundary
"""

import json
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    NETWORK = "network"
    HTTP = "http"
    DECODE = "decode"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


def _describe(original_error: Exception | None, url: str | None) -> str | None:
    details = None
    if original_error:
        details = f"{type(original_error).__name__}: {str(original_error)}"
    if url:
        details = f"URL: {url}" + (f"\n{details}" if details else "")
    return details


class NetworkError(AppError):
    """The catalog could not be reached (no connectivity or timeout)."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "Check your internet connection",
                "Try again in a few moments",
            ],
            technical_details=_describe(original_error, url),
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url


class HttpError(AppError):
    """The catalog answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        if status_code in (401, 403):
            suggested_actions = [
                "Check that the API key is valid",
                "Set a key with --api-key or in the configuration file",
            ]
        elif status_code == 404:
            suggested_actions = ["The requested game may no longer exist"]
        elif status_code == 429:
            suggested_actions = ["Wait a few minutes before retrying"]
        elif status_code >= 500:
            suggested_actions = [
                "The catalog service is experiencing issues",
                "Try again later",
            ]
        else:
            suggested_actions = ["Try again"]

        details = _describe(original_error, url)
        super().__init__(
            message=message,
            category=ErrorCategory.HTTP,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=f"Status: {status_code}" + (f"\n{details}" if details else ""),
            recoverable=status_code not in (401, 403),
        )
        self.status_code = status_code
        self.original_error = original_error
        self.url = url


class DecodeError(AppError):
    """The catalog answered with a payload of unexpected shape."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.DECODE,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "The catalog response format may have changed",
                "Try again later",
            ],
            technical_details=_describe(original_error, url),
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url


class ValidationError(AppError):
    """A value supplied by the user or the config file was rejected."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        details = []
        if field:
            details.append(f"field={field}")
        if value is not None:
            # Long values are cut so they stay readable in the log
            details.append(f"value={repr(value)[:100]}")
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            suggested_actions=["Correct the value and try again"],
            technical_details=", ".join(details) or None,
            recoverable=True,
        )
        self.field = field
        self.value = value


class ConfigurationError(AppError):
    """The client cannot start with the current settings."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = [f"Edit {setting} in config.json" if setting else "Edit config.json"]
        if setting == "api_key":
            suggested_actions.append("Or pass the key with --api-key")
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        technical_details = f"{setting}={current_value!r}" if setting else None

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


HTTP_ERROR_MESSAGES: dict[int, str] = {
    400: "The request was invalid. Please check your input.",
    401: "Authentication failed. Please check your API key.",
    403: "Access denied. Please check your API key.",
    404: "The requested game was not found.",
    408: "The request timed out. Please try again.",
    429: "Too many requests. Please wait before trying again.",
    500: "The server encountered an error. Please try again later.",
    502: "The server is temporarily unavailable. Please try again later.",
    503: "The service is temporarily unavailable. Please try again later.",
    504: "The server took too long to respond. Please try again.",
}


def http_error_message(status_code: int) -> str:
    """Get a user-friendly message for an HTTP status code."""
    return HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code} occurred.")


def error_message(error: BaseException) -> str:
    """Get the human-readable message carried by an error.

    Args:
        error: Any exception

    Returns:
        The AppError message, or the exception text (may be empty)
    """
    if isinstance(error, AppError):
        return error.message
    return str(error)


class ErrorHandlingService:
    """Centralized error handling service.

    This service provides:
    - Error classification and user-friendly message generation
    - Error logging with technical details
    - A bounded history of recent errors
    """

    def __init__(self, max_history_size: int = 100) -> None:
        """Initialize the error handling service.

        Args:
            max_history_size: Number of errors kept in the history
        """
        self._error_history: deque[tuple[float, AppError]] = deque(maxlen=max_history_size)
        log.info("Error handling service initialized", max_history_size=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self.convert_to_app_error(error, operation, component, context)

        self._log_error(app_error, operation, component, context)

        self._error_history.append((time.time(), app_error))
        return app_error.to_user_friendly()

    def convert_to_app_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> AppError:
        """Convert a standard exception to an AppError."""
        if isinstance(error, AppError):
            return error

        url = context.get("url") if context else None

        if isinstance(error, httpx.TimeoutException):
            return NetworkError(
                message="The request timed out. The server may be slow or unavailable.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            return HttpError(
                message=http_error_message(status_code),
                status_code=status_code,
                original_error=error,
                url=str(error.request.url) if error.request else url,
            )
        elif isinstance(error, httpx.RequestError):
            return NetworkError(
                message="Unable to connect to the server. Please check your internet connection.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, json.JSONDecodeError):
            return DecodeError(
                message="The server sent a response that could not be read.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, ValueError):
            return ValidationError(
                message=str(error),
                field=context.get("field") if context else None,
                value=context.get("value") if context else None,
            )

        return AppError(
            message=str(error) or "An unexpected error occurred. Please try again.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {str(error)}",
            recoverable=True,
            context=ErrorContext(
                operation=operation,
                component=component,
                details=context or {},
            ),
        )

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.error if error.severity == ErrorSeverity.ERROR else log.warning

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """The last ``count`` handled errors, oldest first."""
        return [error for _, error in list(self._error_history)[-count:]]

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:
                parts.append(f"  • {action}")

        return "\n".join(parts)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service."""
    return get_error_service().handle_error(error, operation, component, context)
