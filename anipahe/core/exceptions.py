"""
Core Exceptions - Custom exception classes for AniPahe.

This module defines the exception hierarchy raised by the resolution
pipeline. Every error carries the failing URL or request parameters so
callers can diagnose which page or API call diverged.
"""

from typing import Optional, Any, Dict


class AniPaheError(Exception):
    """Base exception class for all AniPahe-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize AniPahe error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AniPaheError):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.config_path = config_path


class NetworkError(AniPaheError):
    """Raised by the transport when a request fails."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ExtractionError(AniPaheError):
    """
    Raised when a required pattern is missing from page text, or when a
    remote JSON payload does not have the expected shape.
    """

    def __init__(self, message: str, pattern: Optional[str] = None, url: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize extraction error.

        Args:
            message: Error description
            pattern: Regular expression that failed to match
            url: URL of the page being extracted
            details: Additional error context
        """
        if url is not None:
            message = f"{message} for url: {url}"
        super().__init__(message, details)
        self.pattern = pattern
        self.url = url


class ApiUsageError(AniPaheError):
    """Raised when the API answers a well-formed request with an empty body."""

    def __init__(self, message: str, params: Optional[Dict[str, Any]] = None, details: Optional[Any] = None):
        """
        Initialize API usage error.

        Args:
            message: Error description
            params: Query parameters of the rejected request
            details: Additional error context
        """
        if params is not None:
            message = f"{message} with parameters: {params}"
        super().__init__(message, details)
        self.params = params


class ResolutionError(AniPaheError):
    """Raised when a precondition of a resolution step does not hold."""

    def __init__(self, message: str, url: Optional[str] = None, details: Optional[Any] = None):
        if url is not None:
            message = f"{message} for url: {url}"
        super().__init__(message, details)
        self.url = url


# Export all exception classes
__all__ = [
    "AniPaheError",
    "ConfigurationError",
    "NetworkError",
    "ExtractionError",
    "ApiUsageError",
    "ResolutionError",
]
