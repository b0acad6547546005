"""
Activity tools for Strava MCP server.

Provides tools for querying and editing Strava activities.
"""

import asyncio
import json

from fastmcp import Context

from strava_mcp.api.activities import ActivityService
from strava_mcp.api.paging import Paging
from strava_mcp.client_factory import get_token, is_token_expired_error, handle_token_expired
from strava_mcp.sdk.errors import StravaError
from strava_mcp.sdk.types import ActivityType, ResourceState, MAX_PAGE_SIZE
from strava_mcp.utils import (
    date_to_epoch,
    format_distance,
    format_duration,
    format_pace,
    to_json,
)


def _summarize(activity) -> dict:
    """Curated list entry for an activity."""
    summary = {
        "id": activity.id,
        "name": activity.name,
        "type": activity.type.value if activity.type else None,
        "start_date_local": activity.start_date_local,
        "distance": format_distance(activity.distance),
        "moving_time": format_duration(activity.moving_time),
        "elevation_gain_meters": activity.total_elevation_gain,
        "average_heartrate": activity.average_heartrate,
        "kudos": activity.kudos_count,
    }
    if activity.type in (ActivityType.RUN, ActivityType.WALK, ActivityType.HIKE):
        summary["pace"] = format_pace(activity.average_speed)
    return {k: v for k, v in summary.items() if v is not None}


def register_tools(app):
    """Register activity tools with the MCP app."""

    @app.tool()
    async def get_activities(
        ctx: Context,
        start_date: str = None,
        end_date: str = None,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        Get your Strava activities, newest first.

        Args:
            start_date: Only activities after this date, YYYY-MM-DD (optional)
            end_date: Only activities up to and including this date, YYYY-MM-DD (optional)
            page: Page number, starting from 1 (default: 1)
            per_page: Activities per page (default: 30, max: 200)
            all_pages: Fetch every page instead of one (default: False)

        Returns:
            JSON with activity summaries
        """
        token = get_token(ctx)
        service = ActivityService.instance(token)

        after = date_to_epoch(start_date) if start_date else None
        before = date_to_epoch(end_date) + 86400 if end_date else None

        try:
            if all_pages:
                future = service.list_all_authenticated_athlete_activities_async(before, after)
            else:
                future = service.list_authenticated_athlete_activities_async(
                    before, after, Paging(page, min(per_page, MAX_PAGE_SIZE)),
                )
            activities = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise

        result = {
            "count": len(activities),
            "page": None if all_pages else page,
            "activities": [_summarize(a) for a in activities],
        }
        return json.dumps({k: v for k, v in result.items() if v is not None}, indent=2)

    @app.tool()
    async def get_activity_details(
        activity_id: int,
        ctx: Context,
        include_all_efforts: bool = False,
    ) -> str:
        """
        Get one activity with its segment efforts.

        Args:
            activity_id: Strava activity id
            include_all_efforts: Include every segment effort, not just
                the notable ones (default: False)

        Returns:
            JSON activity. Private activities of other athletes come back
            with only id and resource_state "meta".
        """
        token = get_token(ctx)
        try:
            activity = await asyncio.wrap_future(
                ActivityService.instance(token).get_activity_async(activity_id, include_all_efforts)
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        if activity is None or activity.resource_state <= ResourceState.META:
            return to_json(activity, f"Activity {activity_id} not found")

        details = json.loads(to_json(activity))
        details["formatted"] = {
            "distance": format_distance(activity.distance),
            "moving_time": format_duration(activity.moving_time),
            "elapsed_time": format_duration(activity.elapsed_time),
        }
        return json.dumps(details, indent=2)

    @app.tool()
    async def update_activity(
        activity_id: int,
        ctx: Context,
        name: str = None,
        activity_type: str = None,
        description: str = None,
        private: bool = None,
        commute: bool = None,
        trainer: bool = None,
        gear_id: str = None,
    ) -> str:
        """
        Edit one of your activities. Only the fields given are changed.

        Args:
            activity_id: Strava activity id
            name: New activity name
            activity_type: Strava activity type such as "Run" or "Ride"
            description: New description
            private: Hide the activity from others
            commute: Mark as a commute
            trainer: Mark as done on a trainer
            gear_id: Gear id, or "none" to clear it

        Returns:
            JSON updated activity
        """
        token = get_token(ctx)
        kind = None
        if activity_type is not None:
            kind = ActivityType(activity_type)
            if kind is ActivityType.UNKNOWN:
                raise ValueError(f"Unknown activity type {activity_type!r}")
        try:
            activity = await asyncio.wrap_future(
                ActivityService.instance(token).update_activity_async(
                    activity_id,
                    name=name,
                    activity_type=kind,
                    description=description,
                    private=private,
                    commute=commute,
                    trainer=trainer,
                    gear_id=gear_id,
                )
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(activity)

    @app.tool()
    async def get_activity_photos(activity_id: int, ctx: Context) -> str:
        """
        Get the photos attached to an activity.

        Args:
            activity_id: Strava activity id

        Returns:
            JSON list of photos with caption and image URLs
        """
        token = get_token(ctx)
        try:
            photos = await asyncio.wrap_future(
                ActivityService.instance(token).list_activity_photos_async(activity_id)
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        if photos is None:
            return to_json(None, f"Activity {activity_id} not found")
        return to_json({"activity_id": activity_id, "count": len(photos), "photos": photos})

    return app
