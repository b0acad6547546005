"""
Live Strava API test fixtures.

These tests hit the REAL Strava API to check that response shapes still
parse into the typed model. They require a valid access token.

Provide credentials via environment variables:
  STRAVA_ACCESS_TOKEN = OAuth access token (read, profile:read_all, activity:read scopes)
  STRAVA_API_URL      = API base URL (optional, defaults to https://www.strava.com/api/v3)

Run: pytest tests/live/ -v
"""

import os

import pytest

from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient


@pytest.fixture(scope="session")
def live_token():
    """
    A Token for the real API.
    Skips all live tests if no access token is available.
    """
    access_token = os.environ.get("STRAVA_ACCESS_TOKEN")
    if not access_token:
        pytest.skip("No Strava credentials: set STRAVA_ACCESS_TOKEN")
    return Token.load_token(access_token)


@pytest.fixture(scope="session")
def live_client(live_token):
    return StravaClient(live_token.access_token)
