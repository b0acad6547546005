"""
Strava v3 HTTP Client.

Handles HTTP transport, bearer authentication, rate-limit tracking, and
status-code translation. All endpoint-specific logic lives in the sibling
modules (athletes, segments, activities, ...).
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

import requests

from strava_mcp.sdk.errors import (
    NotFoundError,
    RateLimitError,
    StravaApiError,
    TransportError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

API_URL = "https://www.strava.com/api/v3"
DEFAULT_TIMEOUT = 30.0

# Warn when usage reaches this share of either quota
RATE_LIMIT_WARNING_RATIO = 0.9


class StravaClient:
    """
    Strava v3 HTTP transport.

    Handles headers, request/response parsing and error translation.
    Endpoint calls are in sibling modules (sdk.athletes, sdk.segments, etc.).
    """

    def __init__(self, access_token: str, api_url: str = None, timeout: float = None):
        self._access_token = access_token
        self._api_url = (api_url or os.environ.get("STRAVA_API_URL", API_URL)).rstrip("/")
        self._timeout = timeout or float(os.environ.get("STRAVA_TIMEOUT", DEFAULT_TIMEOUT))

        # (15-minute, daily) pairs, as reported by the last response
        self.rate_limit: Optional[Tuple[int, int]] = None
        self.rate_limit_usage: Optional[Tuple[int, int]] = None

        self._session = requests.Session()

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def api_url(self) -> str:
        return self._api_url

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        data: Dict = None,
    ) -> Any:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST/PUT/DELETE)
            endpoint: API endpoint path (e.g. "athletes/227615")
            params: Query parameters; None values are dropped
            data: Form body for writes; None values are dropped

        Returns:
            Decoded JSON body (dict or list)

        Raises:
            NotFoundError: HTTP 404
            UnauthorizedError: HTTP 401 or 403
            RateLimitError: HTTP 429
            StravaApiError: Any other non-success status
            TransportError: Connection failure or undecodable body
        """
        headers = {"Authorization": f"Bearer {self._access_token}"}
        url = f"{self._api_url}/{endpoint}"
        params = _drop_nones(params)
        data = _drop_nones(data)

        logger.debug("%s %s params=%s", method.upper(), endpoint, params)

        try:
            if method.upper() == "GET":
                response = self._session.get(
                    url, headers=headers, params=params, timeout=self._timeout,
                )
            elif method.upper() == "PUT":
                response = self._session.put(
                    url, headers=headers, params=params, data=data, timeout=self._timeout,
                )
            elif method.upper() == "DELETE":
                response = self._session.delete(
                    url, headers=headers, params=params, timeout=self._timeout,
                )
            else:
                response = self._session.post(
                    url, headers=headers, params=params, data=data, timeout=self._timeout,
                )
        except requests.RequestException as e:
            raise TransportError(f"{method.upper()} {endpoint} failed: {e}") from e

        self._record_rate_limits(response)

        if response.status_code >= 400:
            raise _api_error(response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method.upper()} {endpoint} returned invalid JSON") from e

    def _record_rate_limits(self, response) -> None:
        limit = _parse_pair(response.headers.get("X-RateLimit-Limit"))
        usage = _parse_pair(response.headers.get("X-RateLimit-Usage"))
        if limit:
            self.rate_limit = limit
        if usage:
            self.rate_limit_usage = usage
        if limit and usage:
            for used, allowed, window in zip(usage, limit, ("15-minute", "daily")):
                if allowed and used >= allowed * RATE_LIMIT_WARNING_RATIO:
                    logger.warning(
                        "Strava %s rate limit at %d/%d requests", window, used, allowed,
                    )


def _api_error(response) -> StravaApiError:
    """Translate an error response into the matching exception."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("message") or response.reason or "Strava API error"
    errors = body.get("errors") or []
    status = response.status_code

    if status == 404:
        return NotFoundError(message, status, errors)
    if status in (401, 403):
        return UnauthorizedError(message, status, errors)
    if status == 429:
        return RateLimitError(message, status, errors)
    return StravaApiError(message, status, errors)


def _parse_pair(header: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse a "600,30000" style rate-limit header."""
    if not header:
        return None
    parts = header.split(",")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def _drop_nones(d: Optional[Dict]) -> Optional[Dict]:
    if d is None:
        return None
    return {k: v for k, v in d.items() if v is not None}


def paging_params(page: int, per_page: int) -> Dict[str, Any]:
    """Strava page/per_page query; per_page 0 leaves the window size to Strava."""
    return {"page": page, "per_page": per_page or None}


def bool_param(value: Optional[bool]) -> Optional[str]:
    """Strava expects lowercase "true"/"false"; None drops the field."""
    if value is None:
        return None
    return "true" if value else "false"
