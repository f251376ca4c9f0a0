"""
Exception hierarchy for InlineTrans.

Provides specific exception types so that callers can tell configuration
problems apart from backend failures and surface a useful message.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List


class InlineTransError(Exception):
    """Base exception for all InlineTrans errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
        suggestion: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Additional error details
            recoverable: Whether error can be recovered from
            suggestion: Suggested fix or workaround
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion
        }

    def __str__(self) -> str:
        """String representation with suggestion if available."""
        result = self.message
        if self.suggestion:
            result += f"\nSuggestion: {self.suggestion}"
        return result


class NoTargetError(InlineTransError):
    """Raised when no translatable root can be found."""

    def __init__(self, message: str = "No translatable region was found."):
        super().__init__(
            message,
            recoverable=True,
            suggestion="Open a rendered view or pass an explicit root element."
        )


class ConfigurationError(InlineTransError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        valid_values: Optional[List[Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that's invalid
            invalid_value: Invalid value provided
            valid_values: List of valid values
        """
        details = {
            "config_key": config_key,
            "invalid_value": invalid_value,
            "valid_values": valid_values
        }

        suggestion = None
        if config_key and valid_values:
            suggestion = f"Valid values for {config_key}: {', '.join(map(str, valid_values))}"
        elif config_key:
            suggestion = f"Check configuration for '{config_key}'"

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.config_key = config_key
        self.invalid_value = invalid_value
        self.valid_values = valid_values


ConfigError = ConfigurationError


class EmptyResultError(InlineTransError):
    """Raised when a backend answers without usable text."""

    def __init__(self, text: str, backend: Optional[str] = None):
        message = "Translation result is empty, check the API response format or the prompt."
        details = {"source_text": text, "backend": backend}
        super().__init__(
            message,
            details,
            recoverable=True,
            suggestion="Verify the endpoint returns 'translatedText' or a chat completion."
        )
        self.text = text
        self.backend = backend


class BackendError(InlineTransError):
    """Raised when a translation backend fails."""

    def __init__(
        self,
        backend: str,
        message: str,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
        response_body: Optional[Any] = None
    ):
        """
        Initialize backend error.

        Args:
            backend: Backend name
            message: Error message
            original_error: Original exception if any
            status_code: HTTP status returned by the endpoint, if any
            response_body: Raw response for diagnosis, if any
        """
        full_message = f"Backend '{backend}' failed: {message}"
        details = {
            "backend": backend,
            "original_error": str(original_error) if original_error else None,
            "status_code": status_code,
            "response_body": response_body
        }

        suggestion = None
        if status_code in (401, 403):
            suggestion = "Check the API key configured for this backend."
        elif status_code == 404:
            suggestion = "Check the configured API URL."
        elif original_error is not None:
            suggestion = "Check network connectivity and the configured API URL."

        super().__init__(full_message, details, recoverable=True, suggestion=suggestion)
        self.backend = backend
        self.original_error = original_error
        self.status_code = status_code
        self.response_body = response_body


class SelectorError(InlineTransError):
    """Raised when a skip selector cannot be evaluated."""

    def __init__(self, selector: str, original_error: Optional[Exception] = None):
        super().__init__(
            f"Invalid selector: {selector!r}",
            {"selector": selector, "original_error": str(original_error) if original_error else None},
            recoverable=True
        )
        self.selector = selector
        self.original_error = original_error
