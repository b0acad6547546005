"""
Strava segment effort SDK functions.
"""

from typing import Any, Dict

from strava_mcp.sdk.client import StravaClient


def get_segment_effort(client: StravaClient, effort_id: int) -> Dict[str, Any]:
    """
    Get a single effort on a segment.

    GET segment_efforts/{id}

    Returns:
        Detailed effort {id, resource_state: 3, segment: {...}, elapsed_time, ...}
    """
    return client.make_request("GET", f"segment_efforts/{effort_id}")
