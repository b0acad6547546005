"""
Strava segment SDK functions.

Segments, starring, efforts, leaderboards, and the segment explorer.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from strava_mcp.sdk.client import StravaClient, bool_param, paging_params
from strava_mcp.sdk.types import (
    AgeGroup,
    ClimbCategory,
    ExplorerActivityType,
    Gender,
    LeaderboardDateRange,
    WeightClass,
)


def get_segment(client: StravaClient, segment_id: int) -> Dict[str, Any]:
    """
    Get a segment.

    GET segments/{id}

    Returns:
        Detailed segment {id, resource_state: 3, name, distance, average_grade, ...}
    """
    return client.make_request("GET", f"segments/{segment_id}")


def list_authenticated_athlete_starred_segments(
    client: StravaClient, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List segments starred by the authenticated athlete.

    GET segments/starred
    """
    return client.make_request(
        "GET", "segments/starred", params=paging_params(page, per_page),
    )


def list_starred_segments(
    client: StravaClient, athlete_id: int, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List segments starred by another athlete.

    GET athletes/{id}/segments/starred
    """
    return client.make_request(
        "GET", f"athletes/{athlete_id}/segments/starred", params=paging_params(page, per_page),
    )


def star_segment(client: StravaClient, segment_id: int, starred: bool) -> Dict[str, Any]:
    """
    Star or unstar a segment for the authenticated athlete.

    PUT segments/{id}/starred

    Returns:
        Detailed segment with the new starred flag
    """
    return client.make_request(
        "PUT",
        f"segments/{segment_id}/starred",
        data={"starred": bool_param(starred)},
    )


def list_segment_efforts(
    client: StravaClient,
    segment_id: int,
    athlete_id: int = None,
    start_date_local: Optional[datetime] = None,
    end_date_local: Optional[datetime] = None,
    page: int = 1,
    per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List efforts on a segment, optionally for one athlete and/or a local date range.

    GET segments/{id}/all_efforts

    The date range is inclusive and both ends must be sent together.

    Raises:
        ValueError: If only one end of the date range is given
    """
    if (start_date_local is None) != (end_date_local is None):
        raise ValueError("start_date_local and end_date_local must be given together")

    params = paging_params(page, per_page)
    params["athlete_id"] = athlete_id
    if start_date_local is not None:
        params["start_date_local"] = _iso(start_date_local)
        params["end_date_local"] = _iso(end_date_local)

    return client.make_request("GET", f"segments/{segment_id}/all_efforts", params=params)


def get_segment_leaderboard(
    client: StravaClient,
    segment_id: int,
    gender: Gender = None,
    age_group: AgeGroup = None,
    weight_class: WeightClass = None,
    following: bool = None,
    club_id: int = None,
    date_range: LeaderboardDateRange = None,
    context_entries: int = None,
    page: int = 1,
    per_page: int = 0,
) -> Dict[str, Any]:
    """
    Get one page of a segment leaderboard.

    GET segments/{id}/leaderboard

    Age group and weight class filters need a premium account.

    Returns:
        {effort_count, entry_count, entries: [{athlete_name, rank, elapsed_time, ...}]}
    """
    params = paging_params(page, per_page)
    params.update({
        "gender": gender.value if gender else None,
        "age_group": age_group.value if age_group else None,
        "weight_class": weight_class.value if weight_class else None,
        "following": bool_param(following),
        "club_id": club_id,
        "date_range": date_range.value if date_range else None,
        "context_entries": context_entries,
    })
    return client.make_request("GET", f"segments/{segment_id}/leaderboard", params=params)


def explore_segments(
    client: StravaClient,
    southwest: Tuple[float, float],
    northeast: Tuple[float, float],
    activity_type: ExplorerActivityType = None,
    min_cat: ClimbCategory = None,
    max_cat: ClimbCategory = None,
) -> Dict[str, Any]:
    """
    Find popular segments inside a bounding box. Returns up to 10 segments.

    GET segments/explore

    Args:
        southwest: (latitude, longitude) of the south-west corner
        northeast: (latitude, longitude) of the north-east corner

    Returns:
        {segments: [{id, name, climb_category, avg_grade, elev_difference, ...}]}
    """
    bounds = ",".join(str(v) for v in (*southwest, *northeast))
    params = {
        "bounds": bounds,
        "activity_type": activity_type.value if activity_type else None,
        "min_cat": int(min_cat) if min_cat is not None else None,
        "max_cat": int(max_cat) if max_cat is not None else None,
    }
    return client.make_request("GET", "segments/explore", params=params)


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")
