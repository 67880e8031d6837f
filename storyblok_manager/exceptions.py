"""
Exceptions for Storyblok Manager.

Every failure raised by the client is one of:

- ConfigurationError: a required setting is missing (no network call made)
- ValidationError: input failed a local admission check (no network call made)
- RemoteError: the service answered with a non-success status
- TransportError: the request could not complete

RemoteError and TransportError share the APIError base so callers can
handle "the remote call failed" in one place and still branch on detail.
"""

from typing import Any, Dict, List, Optional


class StoryblokError(Exception):
    """Base exception for Storyblok Manager errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(StoryblokError):
    """Required configuration (space ID or management token) is missing."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []


class ValidationError(StoryblokError):
    """Input failed a local admission check before any request was sent."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        violations: Optional[List[str]] = None
    ):
        super().__init__(message, details)
        self.violations = violations or [message]


class APIError(StoryblokError):
    """A remote call did not produce a successful response."""

    status_code: Optional[int] = None


class RemoteError(APIError):
    """The Management API returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        response_data: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=body or None)
        self.status_code = status_code
        self.body = body
        self.response_data = response_data or {}

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TransportError(APIError):
    """The request failed before an HTTP response was received."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, details=str(cause) if cause else None)
        self.cause = cause
