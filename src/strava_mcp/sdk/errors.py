"""
Strava API error hierarchy.

The transport raises these; the service layer decides which ones to downgrade.
"""

from typing import Any, Dict, List, Optional


class StravaError(Exception):
    """Base class for everything raised by this package."""


class TransportError(StravaError):
    """Network failure or an undecodable response body."""


class StravaApiError(StravaError):
    """Strava answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


class NotFoundError(StravaApiError):
    """The remote resource does not exist (HTTP 404)."""


class UnauthorizedError(StravaApiError):
    """The token lacks rights to the resource (HTTP 401/403)."""


class RateLimitError(StravaApiError):
    """The 15-minute or daily request quota is exhausted (HTTP 429)."""


class InvalidPagingError(StravaError, ValueError):
    """A paging instruction with a page < 1 or a negative page size."""
