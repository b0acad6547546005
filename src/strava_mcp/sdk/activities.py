"""
Strava activities SDK functions.
"""

from typing import Any, Dict, List

from strava_mcp.sdk.client import StravaClient, bool_param, paging_params
from strava_mcp.sdk.types import ActivityType


def get_activity(
    client: StravaClient, activity_id: int, include_all_efforts: bool = False,
) -> Dict[str, Any]:
    """
    Get an activity.

    GET activities/{id}

    Returns:
        Detailed activity {id, resource_state: 3, name, distance, segment_efforts, ...}
    """
    params = {"include_all_efforts": "true"} if include_all_efforts else None
    return client.make_request("GET", f"activities/{activity_id}", params=params)


def list_authenticated_athlete_activities(
    client: StravaClient,
    before: int = None,
    after: int = None,
    page: int = 1,
    per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List the authenticated athlete's activities, newest first.

    GET athlete/activities

    Args:
        before: Only activities that started before this epoch timestamp
        after: Only activities that started after this epoch timestamp

    Returns:
        [{id, resource_state: 2, name, type, distance, moving_time, ...}]
    """
    params = paging_params(page, per_page)
    params["before"] = before
    params["after"] = after
    return client.make_request("GET", "athlete/activities", params=params)


def update_activity(
    client: StravaClient,
    activity_id: int,
    name: str = None,
    activity_type: ActivityType = None,
    description: str = None,
    private: bool = None,
    commute: bool = None,
    trainer: bool = None,
    gear_id: str = None,
) -> Dict[str, Any]:
    """
    Update an activity owned by the authenticated athlete. Only given fields change.

    PUT activities/{id}

    Returns:
        Detailed activity as stored after the update
    """
    return client.make_request(
        "PUT",
        f"activities/{activity_id}",
        data={
            "name": name,
            "type": activity_type.value if activity_type else None,
            "description": description,
            "private": bool_param(private),
            "commute": bool_param(commute),
            "trainer": bool_param(trainer),
            "gear_id": gear_id,
        },
    )


def list_activity_photos(client: StravaClient, activity_id: int) -> List[Dict[str, Any]]:
    """
    List photos attached to an activity. Not paginated.

    GET activities/{id}/photos

    Returns:
        [{id, activity_id, resource_state, ref, uid, caption, type, uploaded_at, ...}]
    """
    return client.make_request(
        "GET", f"activities/{activity_id}/photos", params={"photo_sources": "true"},
    )
