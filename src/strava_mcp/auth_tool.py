"""
Authentication tools for Strava MCP server.

Provides session management and common identity tools.
"""

import asyncio
import json
import logging

from fastmcp import Context

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

from strava_mcp.api.athletes import AthleteService
from strava_mcp.client_factory import (
    get_token,
    set_session_tokens,
    clear_session_tokens,
    is_token_expired_error,
    handle_token_expired,
)
from strava_mcp.sdk.errors import StravaError


def register_tools(app):
    """Register authentication and identity tools with the MCP app."""

    @app.tool()
    async def set_strava_session(strava_tokens: str, ctx: Context) -> dict:
        """
        Start a Strava session from an OAuth access token.

        Accepts a bare access token, the JSON returned by Strava's token
        endpoint, or tokens previously saved from this server.

        Args:
            strava_tokens: Access token or token JSON

        Returns:
            Session result with the token to save for next time
        """
        try:
            token = set_session_tokens(ctx, strava_tokens)
        except ValueError as e:
            logger.error(f"Error restoring Strava session: {e}")
            return {"success": False, "error": str(e)}
        if not token.is_valid():
            return {
                "success": False,
                "error": "Token is malformed or already expired",
            }
        return {"success": True, "message": "Session started", "tokens": token.export_token()}

    @app.tool()
    async def strava_logout(ctx: Context) -> dict:
        """
        Logout from the current Strava session.

        Clears session data and cached Strava data. A new token is needed afterwards.

        Returns:
            Logout confirmation
        """
        clear_session_tokens(ctx)
        return {"success": True, "message": "Logged out"}

    @app.tool()
    async def get_user_name(ctx: Context) -> str:
        """
        Get the authenticated athlete's name.

        Returns:
            JSON with name, athlete id and location
        """
        token = get_token(ctx)
        try:
            athlete = await asyncio.wrap_future(
                AthleteService.instance(token).get_authenticated_athlete_async()
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return json.dumps({
            "name": athlete.name,
            "athlete_id": athlete.id,
            "city": athlete.city,
            "country": athlete.country,
        }, indent=2)

    @app.tool()
    async def get_available_features(ctx: Context) -> str:
        """
        Get list of available Strava data features.

        Returns a summary of what data types and tools are available
        through this MCP server.

        Returns:
            JSON with available feature categories
        """
        features = {
            "platform": "Strava API v3",
            "auth": [
                "set_strava_session - Start a session from an access token",
                "strava_logout - Clear session and cached data",
            ],
            "user": [
                "get_user_name - Authenticated athlete's name",
                "get_available_features - This feature list",
            ],
            "athletes": [
                "get_athlete - Athlete profile (yours if no id is given)",
                "get_athlete_friends - Friends, or friends you both follow",
                "get_athlete_koms - KOM/QOM efforts held by an athlete",
                "get_athlete_stats - Recent, year-to-date and all-time totals",
                "update_athlete - Edit your city, state, country, sex or weight",
            ],
            "segments": [
                "get_segment - Segment details",
                "get_starred_segments - Starred segments",
                "star_segment - Star or unstar a segment",
                "get_segment_efforts - Efforts on a segment with athlete/date filters",
                "get_segment_leaderboard - Leaderboard with gender/age/weight/date filters",
                "explore_segments - Popular segments inside a bounding box",
            ],
            "activities": [
                "get_activities - Your activities with date filters",
                "get_activity_details - One activity with segment efforts",
                "update_activity - Rename or edit an activity",
                "get_activity_photos - Photos on an activity",
            ],
            "notes": [
                "Access tokens expire after six hours; refresh them through Strava OAuth",
                "Private data of other athletes comes back as an id-only placeholder",
                "Results are cached per token until strava_logout",
            ],
        }
        return json.dumps(features, indent=2)

    return app
