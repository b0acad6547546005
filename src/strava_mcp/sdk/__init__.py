"""
Strava v3 Low-Level SDK.

Thin typed wrapper over the Strava HTTP API.
Each function maps 1:1 to a Strava endpoint and returns decoded JSON.
"""

from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient
from strava_mcp.sdk.errors import (
    StravaError,
    StravaApiError,
    TransportError,
    NotFoundError,
    UnauthorizedError,
    RateLimitError,
    InvalidPagingError,
)
from strava_mcp.sdk.types import (
    ResourceState,
    Gender,
    AgeGroup,
    WeightClass,
    LeaderboardDateRange,
    ExplorerActivityType,
    ClimbCategory,
    ActivityType,
    PhotoType,
    MAX_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
)

__all__ = [
    "Token",
    "StravaClient",
    # Errors
    "StravaError",
    "StravaApiError",
    "TransportError",
    "NotFoundError",
    "UnauthorizedError",
    "RateLimitError",
    "InvalidPagingError",
    # Types
    "ResourceState",
    "Gender",
    "AgeGroup",
    "WeightClass",
    "LeaderboardDateRange",
    "ExplorerActivityType",
    "ClimbCategory",
    "ActivityType",
    "PhotoType",
    "MAX_PAGE_SIZE",
    "DEFAULT_PAGE_SIZE",
]
