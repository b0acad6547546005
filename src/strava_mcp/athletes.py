"""
Athlete tools for Strava MCP server.

Profiles, friends, KOMs and statistics.
"""

import asyncio

from fastmcp import Context

from strava_mcp.api.athletes import AthleteService
from strava_mcp.api.paging import Paging
from strava_mcp.client_factory import get_token, is_token_expired_error, handle_token_expired
from strava_mcp.sdk.errors import StravaError
from strava_mcp.sdk.types import Gender, MAX_PAGE_SIZE
from strava_mcp.utils import to_json


async def _athlete_id_or_self(service: AthleteService, athlete_id: int = None) -> int:
    if athlete_id is not None:
        return athlete_id
    if service.token.athlete_id is not None:
        return service.token.athlete_id
    athlete = await asyncio.wrap_future(service.get_authenticated_athlete_async())
    return athlete.id


def register_tools(app):
    """Register athlete tools with the MCP app."""

    @app.tool()
    async def get_athlete(ctx: Context, athlete_id: int = None) -> str:
        """
        Get an athlete's profile.

        Args:
            athlete_id: Strava athlete id (optional, defaults to you)

        Returns:
            JSON athlete profile. Athletes you may not see come back with
            only id and resource_state "meta".
        """
        token = get_token(ctx)
        service = AthleteService.instance(token)
        try:
            if athlete_id is None:
                athlete = await asyncio.wrap_future(service.get_authenticated_athlete_async())
            else:
                athlete = await asyncio.wrap_future(service.get_athlete_async(athlete_id))
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(athlete, f"Athlete {athlete_id} not found")

    @app.tool()
    async def get_athlete_friends(
        ctx: Context,
        athlete_id: int = None,
        both_following: bool = False,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        List the athletes someone follows.

        Args:
            athlete_id: Strava athlete id (optional, defaults to you)
            both_following: Only athletes that both you and athlete_id follow
            page: Page number, starting from 1 (default: 1)
            per_page: Athletes per page (default: 30, max: 200)
            all_pages: Fetch every page instead of one (default: False)

        Returns:
            JSON list of athlete summaries
        """
        token = get_token(ctx)
        service = AthleteService.instance(token)
        paging = Paging(page, min(per_page, MAX_PAGE_SIZE))
        try:
            if both_following:
                if athlete_id is None:
                    raise ValueError("both_following needs another athlete's id")
                if all_pages:
                    future = service.list_all_athletes_both_following_async(athlete_id)
                else:
                    future = service.list_athletes_both_following_async(athlete_id, paging)
            elif athlete_id is None:
                if all_pages:
                    future = service.list_all_authenticated_athlete_friends_async()
                else:
                    future = service.list_authenticated_athlete_friends_async(paging)
            elif all_pages:
                future = service.list_all_athlete_friends_async(athlete_id)
            else:
                future = service.list_athlete_friends_async(athlete_id, paging)
            friends = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json({"count": len(friends), "athletes": friends})

    @app.tool()
    async def get_athlete_koms(
        ctx: Context,
        athlete_id: int = None,
        page: int = 1,
        per_page: int = 30,
        all_pages: bool = False,
    ) -> str:
        """
        List the segment efforts where an athlete holds the KOM or QOM.

        Args:
            athlete_id: Strava athlete id (optional, defaults to you)
            page: Page number, starting from 1 (default: 1)
            per_page: Efforts per page (default: 30, max: 200)
            all_pages: Fetch every page instead of one (default: False)

        Returns:
            JSON list of segment efforts
        """
        token = get_token(ctx)
        service = AthleteService.instance(token)
        try:
            athlete_id = await _athlete_id_or_self(service, athlete_id)
            if all_pages:
                future = service.list_all_athlete_koms_async(athlete_id)
            else:
                future = service.list_athlete_koms_async(
                    athlete_id, Paging(page, min(per_page, MAX_PAGE_SIZE)),
                )
            koms = await asyncio.wrap_future(future)
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json({"athlete_id": athlete_id, "count": len(koms), "efforts": koms})

    @app.tool()
    async def get_athlete_stats(ctx: Context, athlete_id: int = None) -> str:
        """
        Get an athlete's ride, run and swim totals.

        Covers the last four weeks, year to date and all time, plus the
        biggest ride and climb.

        Args:
            athlete_id: Strava athlete id (optional, defaults to you)

        Returns:
            JSON statistics
        """
        token = get_token(ctx)
        service = AthleteService.instance(token)
        try:
            athlete_id = await _athlete_id_or_self(service, athlete_id)
            stats = await asyncio.wrap_future(service.statistics_async(athlete_id))
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(stats, f"Athlete {athlete_id} not found")

    @app.tool()
    async def update_athlete(
        ctx: Context,
        city: str = None,
        state: str = None,
        country: str = None,
        sex: str = None,
        weight: float = None,
    ) -> str:
        """
        Update your own profile. Only the fields given are changed.

        Args:
            city: City name
            state: State or region
            country: Country name
            sex: "M" or "F"
            weight: Weight in kilograms

        Returns:
            JSON updated profile
        """
        token = get_token(ctx)
        gender = None
        if sex is not None:
            gender = Gender(sex.upper())
            if gender is Gender.UNKNOWN:
                raise ValueError(f"sex must be 'M' or 'F', got {sex!r}")
        try:
            athlete = await asyncio.wrap_future(
                AthleteService.instance(token).update_authenticated_athlete_async(
                    city=city, state=state, country=country, sex=gender, weight=weight,
                )
            )
        except StravaError as e:
            if is_token_expired_error(e, token):
                return handle_token_expired(ctx)
            raise
        return to_json(athlete)

    return app
