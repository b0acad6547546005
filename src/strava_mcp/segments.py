"""
Segment tools for Strava MCP server.

Segment details, starring, efforts, leaderboards and the segment explorer.
"""

import asyncio
from datetime import datetime, timedelta

from fastmcp import Context

from strava_mcp.api.paging import Paging
from strava_mcp.api.segments import SegmentService
from strava_mcp.client_factory import get_token, is_token_expired_error, handle_token_expired
from strava_mcp.sdk.errors import StravaError
from strava_mcp.sdk.types import (
    AgeGroup,
    ClimbCategory,
    ExplorerActivityType,
    Gender,
    LeaderboardDateRange,
    WeightClass,
    MAX_CONTEXT_ENTRIES,
    MAX_PAGE_SIZE,
)
from strava_mcp.utils import to_json


def _choice(enum_cls, value: str, name: str):
    """Parse an optional filter value; unknown values are rejected."""
    if value is None:
        return None
    choice = enum_cls(value)
    if choice is enum_cls.UNKNOWN:
        allowed = ", ".join(m.value for m in enum_cls if m is not enum_cls.UNKNOWN)
        raise ValueError(f"Invalid {name} {value!r}. Use one of: {allowed}")
    return choice


def register_tools(app):
    """Register segment tools with the MCP app."""

    @app.tool()
    async def get_segment(segment_id: int, ctx: Context) -> str:
        """
        Get a segment's details.

        Args:
            segment_id: Strava segment id

        Returns:
            JSON segment with distance, grades, elevation, climb category and
            effort counts. Private segments of other athletes come back with
            only id and resource_state "meta".
        """
        token = get_token(ctx)
        try:
            segment = await asyncio.wrap_future(
                SegmentService.instance(token).get_segment_async(segment_id)
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(segment, f"Segment {segment_id} not found")

    @app.tool()
    async def get_starred_segments(
        ctx: Context,
        athlete_id: int = None,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        List starred segments.

        Args:
            athlete_id: Strava athlete id (optional, defaults to you)
            page: Page number, starting from 1 (default: 1)
            per_page: Segments per page (default: 30, max: 200)
            all_pages: Fetch every page instead of one (default: False)

        Returns:
            JSON list of segment summaries
        """
        token = get_token(ctx)
        service = SegmentService.instance(token)
        paging = Paging(page, min(per_page, MAX_PAGE_SIZE))
        try:
            if athlete_id is None:
                if all_pages:
                    future = service.list_all_authenticated_athlete_starred_segments_async()
                else:
                    future = service.list_authenticated_athlete_starred_segments_async(paging)
            elif all_pages:
                future = service.list_all_starred_segments_async(athlete_id)
            else:
                future = service.list_starred_segments_async(athlete_id, paging)
            segments = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json({"count": len(segments), "segments": segments})

    @app.tool()
    async def star_segment(segment_id: int, ctx: Context, starred: bool = True) -> str:
        """
        Star or unstar a segment.

        Args:
            segment_id: Strava segment id
            starred: True to star, False to unstar (default: True)

        Returns:
            JSON updated segment
        """
        token = get_token(ctx)
        try:
            segment = await asyncio.wrap_future(
                SegmentService.instance(token).star_segment_async(segment_id, starred)
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(segment)

    @app.tool()
    async def get_segment_efforts(
        segment_id: int,
        ctx: Context,
        athlete_id: int = None,
        start_date: str = None,
        end_date: str = None,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        List efforts on a segment.

        Efforts are sorted by start date, or by elapsed time when filtered
        to one athlete.

        Args:
            segment_id: Strava segment id
            athlete_id: Only this athlete's efforts (optional)
            start_date: First day in YYYY-MM-DD format, local time (optional, needs end_date)
            end_date: Last day in YYYY-MM-DD format, inclusive (optional, needs start_date)
            page: Page number, starting from 1 (default: 1)
            per_page: Efforts per page (default: 30, max: 200)
            all_pages: Fetch every page instead of one (default: False)

        Returns:
            JSON list of segment efforts
        """
        token = get_token(ctx)
        service = SegmentService.instance(token)

        start = datetime.strptime(start_date, "%Y-%m-%d") if start_date else None
        end = None
        if end_date:
            end = datetime.strptime(end_date, "%Y-%m-%d") + timedelta(days=1, seconds=-1)

        filters = {"athlete_id": athlete_id, "start_date_local": start, "end_date_local": end}
        try:
            if all_pages:
                future = service.list_all_segment_efforts_async(segment_id, **filters)
            else:
                future = service.list_segment_efforts_async(
                    segment_id, paging=Paging(page, min(per_page, MAX_PAGE_SIZE)), **filters,
                )
            efforts = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json({"segment_id": segment_id, "count": len(efforts), "efforts": efforts})

    @app.tool()
    async def get_segment_leaderboard(
        segment_id: int,
        ctx: Context,
        gender: str = None,
        age_group: str = None,
        weight_class: str = None,
        following: bool = None,
        club_id: int = None,
        date_range: str = None,
        context_entries: int = None,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        Get a segment leaderboard.

        Age group and weight class filters need a Strava subscription.

        Args:
            segment_id: Strava segment id
            gender: "M" or "F" (optional)
            age_group: One of 0_24, 25_34, 35_44, 45_54, 55_64, 65_plus (optional)
            weight_class: Kilograms 0_54 .. 95_plus or pounds 0_124 .. 200_plus (optional)
            following: Only athletes you follow (optional)
            club_id: Only members of this club (optional)
            date_range: this_year, this_month, this_week or today (optional)
            context_entries: Entries shown around your own result (default: 2, max: 15)
            page: Page number, starting from 1 (default: 1)
            per_page: Entries per page (default: 30, max: 200)
            all_pages: Fetch the whole leaderboard (default: False)

        Returns:
            JSON with effort_count, entry_count and ranked entries
        """
        token = get_token(ctx)
        service = SegmentService.instance(token)
        filters = {
            "gender": _choice(Gender, gender.upper() if gender else None, "gender"),
            "age_group": _choice(AgeGroup, age_group, "age_group"),
            "weight_class": _choice(WeightClass, weight_class, "weight_class"),
            "following": following,
            "club_id": club_id,
            "date_range": _choice(LeaderboardDateRange, date_range, "date_range"),
        }
        try:
            if all_pages:
                future = service.get_all_segment_leaderboard_async(segment_id, **filters)
            else:
                if context_entries is not None:
                    context_entries = min(context_entries, MAX_CONTEXT_ENTRIES)
                future = service.get_segment_leaderboard_async(
                    segment_id,
                    context_entries=context_entries,
                    paging=Paging(page, min(per_page, MAX_PAGE_SIZE)),
                    **filters,
                )
            board = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(board, f"Segment {segment_id} not found")

    @app.tool()
    async def explore_segments(
        south: float,
        west: float,
        north: float,
        east: float,
        ctx: Context,
        activity_type: str = None,
        min_cat: int = None,
        max_cat: int = None,
    ) -> str:
        """
        Find popular segments inside a bounding box.

        Args:
            south: Southern latitude of the box
            west: Western longitude of the box
            north: Northern latitude of the box
            east: Eastern longitude of the box
            activity_type: "running" or "riding" (default: riding)
            min_cat: Minimum climb category, 0-5, riding only (optional)
            max_cat: Maximum climb category, 0-5, riding only (optional)

        Returns:
            JSON with up to 10 segments
        """
        token = get_token(ctx)
        try:
            response = await asyncio.wrap_future(
                SegmentService.instance(token).segment_explore_async(
                    (south, west),
                    (north, east),
                    activity_type=_choice(ExplorerActivityType, activity_type, "activity_type"),
                    min_cat=ClimbCategory(min_cat) if min_cat is not None else None,
                    max_cat=ClimbCategory(max_cat) if max_cat is not None else None,
                )
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(response)

    return app
