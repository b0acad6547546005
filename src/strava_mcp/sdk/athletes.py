"""
Strava athlete SDK functions.

One function per endpoint; each returns decoded JSON.
"""

from typing import Any, Dict, List

from strava_mcp.sdk.client import StravaClient, paging_params
from strava_mcp.sdk.types import Gender


def get_authenticated_athlete(client: StravaClient) -> Dict[str, Any]:
    """
    Get the athlete who owns the token.

    GET athlete

    Returns:
        Detailed athlete {id, resource_state, firstname, lastname, ...}
    """
    return client.make_request("GET", "athlete")


def get_athlete(client: StravaClient, athlete_id: int) -> Dict[str, Any]:
    """
    Get another athlete.

    GET athletes/{id}

    Returns:
        Summary athlete representation
    """
    return client.make_request("GET", f"athletes/{athlete_id}")


def update_authenticated_athlete(
    client: StravaClient,
    city: str = None,
    state: str = None,
    country: str = None,
    sex: Gender = None,
    weight: float = None,
) -> Dict[str, Any]:
    """
    Update the authenticated athlete's profile. Only given fields change.

    PUT athlete

    Returns:
        Detailed athlete as stored after the update
    """
    return client.make_request(
        "PUT",
        "athlete",
        data={
            "city": city,
            "state": state,
            "country": country,
            "sex": sex.value if sex else None,
            "weight": weight,
        },
    )


def list_authenticated_athlete_friends(
    client: StravaClient, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List athletes the authenticated athlete follows.

    GET athlete/friends

    Returns:
        [{id, resource_state: 2, firstname, ...}]
    """
    return client.make_request(
        "GET", "athlete/friends", params=paging_params(page, per_page),
    )


def list_athlete_friends(
    client: StravaClient, athlete_id: int, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List athletes another athlete follows.

    GET athletes/{id}/friends
    """
    return client.make_request(
        "GET", f"athletes/{athlete_id}/friends", params=paging_params(page, per_page),
    )


def list_athletes_both_following(
    client: StravaClient, athlete_id: int, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List athletes both the authenticated athlete and the given athlete follow.

    GET athletes/{id}/both-following
    """
    return client.make_request(
        "GET", f"athletes/{athlete_id}/both-following", params=paging_params(page, per_page),
    )


def list_athlete_koms(
    client: StravaClient, athlete_id: int, page: int = 1, per_page: int = 0,
) -> List[Dict[str, Any]]:
    """
    List segment efforts where the athlete holds the KOM/QOM.

    GET athletes/{id}/koms

    Returns:
        [{id, resource_state: 2, segment: {...}, elapsed_time, kom_rank, ...}]
    """
    return client.make_request(
        "GET", f"athletes/{athlete_id}/koms", params=paging_params(page, per_page),
    )


def get_athlete_statistics(client: StravaClient, athlete_id: int) -> Dict[str, Any]:
    """
    Get ride/run/swim totals for an athlete.

    GET athletes/{id}/stats

    Returns:
        {biggest_ride_distance, recent_ride_totals: {...}, ytd_run_totals: {...}, ...}
    """
    return client.make_request("GET", f"athletes/{athlete_id}/stats")
