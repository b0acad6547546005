"""
Segment efforts by id.
"""

from concurrent.futures import Future
from typing import Optional

from strava_mcp.api.model import SegmentEffort
from strava_mcp.api.service import StravaService, run_async
from strava_mcp.sdk import efforts as sdk_efforts
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient


class SegmentEffortService(StravaService):
    """Effort facade. Shares the token's effort cache with the athlete and segment facades."""

    def __init__(self, token: Token, client: StravaClient = None):
        super().__init__(token, client)
        self.effort_cache = self._cache(SegmentEffort)

    def get_segment_effort(self, effort_id: int) -> Optional[SegmentEffort]:
        return self._get_entity(
            self.effort_cache,
            effort_id,
            lambda: SegmentEffort.from_dict(sdk_efforts.get_segment_effort(self.client, effort_id)),
        )

    def get_segment_effort_async(self, effort_id: int) -> "Future[Optional[SegmentEffort]]":
        return run_async(self.get_segment_effort, effort_id)
