"""
Shared pytest fixtures for Strava MCP testing.
"""
import pytest
from unittest.mock import Mock, patch

# Monkey-patch: production uses fastmcp.FastMCP, tests use mcp.server.fastmcp.
# Patch fastmcp.Context to match mcp.server.fastmcp.Context so tools work
# with the test FastMCP.
import fastmcp
from mcp.server.fastmcp import server as mcp_server
fastmcp.Context = mcp_server.Context

from mcp.server.fastmcp import FastMCP

from strava_mcp.sdk.auth import Token


ACCESS_TOKEN = "0123456789abcdef0123456789abcdef01234567"
ATHLETE_ID = 227615


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict).
    This helper extracts the text from the first TextContent item.
    """
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


def athlete_json(athlete_id=ATHLETE_ID, resource_state=3, **fields):
    """A Strava athlete payload."""
    data = {
        "id": athlete_id,
        "resource_state": resource_state,
        "firstname": "John",
        "lastname": "Applestrava",
        "city": "San Francisco",
        "country": "United States",
        "sex": "M",
    }
    data.update(fields)
    return data


def segment_json(segment_id=229781, resource_state=3, **fields):
    data = {
        "id": segment_id,
        "resource_state": resource_state,
        "name": "Hawk Hill",
        "activity_type": "Ride",
        "distance": 2684.82,
        "average_grade": 5.7,
        "climb_category": 1,
        "start_latlng": [37.8331119, -122.4834356],
        "end_latlng": [37.8280722, -122.4981393],
    }
    data.update(fields)
    return data


def effort_json(effort_id=1323785488, **fields):
    data = {
        "id": effort_id,
        "resource_state": 2,
        "name": "Hawk Hill",
        "activity": {"id": 321934, "resource_state": 1},
        "athlete": {"id": ATHLETE_ID, "resource_state": 1},
        "elapsed_time": 620,
        "moving_time": 620,
        "distance": 2684.8,
    }
    data.update(fields)
    return data


def activity_json(activity_id=321934, resource_state=3, **fields):
    data = {
        "id": activity_id,
        "resource_state": resource_state,
        "name": "Evening Run",
        "athlete": {"id": ATHLETE_ID, "resource_state": 1},
        "type": "Run",
        "distance": 10000.0,
        "moving_time": 3000,
        "elapsed_time": 3120,
        "total_elevation_gain": 42.0,
        "start_date_local": "2026-02-10T18:02:13Z",
        "average_speed": 3.333,
        "kudos_count": 4,
    }
    data.update(fields)
    return data


@pytest.fixture
def token():
    """A fresh, structurally valid token: its facades and caches start empty."""
    return Token(access_token=ACCESS_TOKEN, athlete_id=ATHLETE_ID)


@pytest.fixture
def invalid_token():
    """A token that fails the structural validity check."""
    return Token(access_token="not-a-strava-token")


@pytest.fixture(autouse=True)
def mock_get_token(token):
    """Auto-mock client_factory.get_token in all tool modules.

    Patches get_token at the module level so that tool functions receive
    the fixture token instead of reading one from the request context.

    Yields the mock function (not the token) so tests can set side_effect
    for error scenarios like "no session".
    """
    get_token_fn = Mock(return_value=token)

    modules_to_patch = [
        "strava_mcp.auth_tool",
        "strava_mcp.athletes",
        "strava_mcp.segments",
        "strava_mcp.activities",
    ]

    patchers = []
    for module in modules_to_patch:
        p = patch(f"{module}.get_token", get_token_fn)
        p.start()
        patchers.append(p)

    yield get_token_fn

    for p in patchers:
        p.stop()


def create_test_app(module):
    """Helper to create a FastMCP app with a specific module registered."""
    app = FastMCP(f"Test Strava {module.__name__}")
    app = module.register_tools(app)
    return app


@pytest.fixture
def mock_context():
    """Create a mock MCP context with state management."""
    context = Mock()
    state = {}

    def get_state(key):
        return state.get(key)

    def set_state(key, value):
        state[key] = value

    context.get_state = get_state
    context.set_state = set_state
    context.session_id = "test-session-1"
    context._state = state

    return context
