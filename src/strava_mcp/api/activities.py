"""
Activity history.

Single activities, the authenticated athlete's list, edits, and photos.
"""

from concurrent.futures import Future
from typing import List, Optional

from strava_mcp.api.model import Activity, Photo, SegmentEffort
from strava_mcp.api.paging import Paging, fetch_all
from strava_mcp.api.service import StravaService, run_async
from strava_mcp.sdk import activities as sdk_activities
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient
from strava_mcp.sdk.types import ActivityType


class ActivityService(StravaService):
    """
    Activity facade. Caches activities and the efforts embedded in detailed ones.

    Get with ActivityService.instance(token).
    """

    def __init__(self, token: Token, client: StravaClient = None):
        super().__init__(token, client)
        self.activity_cache = self._cache(Activity)
        self.effort_cache = self._cache(SegmentEffort)

    def get_activity(self, activity_id: int, include_all_efforts: bool = False) -> Optional[Activity]:
        """
        An activity by id.

        Returns None if it does not exist, and a META placeholder if it is
        private to another athlete. A cached copy is returned as-is, so ask
        for include_all_efforts on the first fetch or clear the cache first.
        """
        def fetch() -> Activity:
            activity = Activity.from_dict(sdk_activities.get_activity(
                self.client, activity_id, include_all_efforts=include_all_efforts,
            ))
            self.effort_cache.put_all(e for e in activity.segment_efforts if e.id is not None)
            return activity

        return self._get_entity(self.activity_cache, activity_id, fetch)

    def list_authenticated_athlete_activities(
        self, before: int = None, after: int = None, paging: Paging = None,
    ) -> List[Activity]:
        """Newest first. before/after are epoch seconds."""
        return self._list(
            self.activity_cache,
            paging,
            lambda p: [
                Activity.from_dict(a)
                for a in sdk_activities.list_authenticated_athlete_activities(
                    self.client, before=before, after=after, page=p.page, per_page=p.page_size,
                )
            ],
        )

    def list_all_authenticated_athlete_activities(
        self, before: int = None, after: int = None,
    ) -> List[Activity]:
        return fetch_all(lambda p: self.list_authenticated_athlete_activities(before, after, p))

    def update_activity(
        self,
        activity_id: int,
        name: str = None,
        activity_type: ActivityType = None,
        description: str = None,
        private: bool = None,
        commute: bool = None,
        trainer: bool = None,
        gear_id: str = None,
    ) -> Activity:
        """Edit an activity and refresh the cached copy."""
        activity = Activity.from_dict(sdk_activities.update_activity(
            self.client,
            activity_id,
            name=name,
            activity_type=activity_type,
            description=description,
            private=private,
            commute=commute,
            trainer=trainer,
            gear_id=gear_id,
        ))
        self.activity_cache.put(activity)
        return activity

    def list_activity_photos(self, activity_id: int) -> Optional[List[Photo]]:
        """Photos on an activity; None if the activity does not exist. Not cached."""
        return self._fetch(lambda: [
            Photo.from_dict(p)
            for p in sdk_activities.list_activity_photos(self.client, activity_id) or []
        ])

    # ── Async variants ───────────────────────────────────────────────────

    def get_activity_async(self, activity_id: int, include_all_efforts: bool = False) -> "Future[Optional[Activity]]":
        return run_async(self.get_activity, activity_id, include_all_efforts)

    def list_authenticated_athlete_activities_async(
        self, before: int = None, after: int = None, paging: Paging = None,
    ) -> "Future[List[Activity]]":
        return run_async(self.list_authenticated_athlete_activities, before, after, paging)

    def list_all_authenticated_athlete_activities_async(
        self, before: int = None, after: int = None,
    ) -> "Future[List[Activity]]":
        return run_async(self.list_all_authenticated_athlete_activities, before, after)

    def update_activity_async(self, activity_id: int, **fields) -> "Future[Activity]":
        return run_async(self.update_activity, activity_id, **fields)

    def list_activity_photos_async(self, activity_id: int) -> "Future[Optional[List[Photo]]]":
        return run_async(self.list_activity_photos, activity_id)
