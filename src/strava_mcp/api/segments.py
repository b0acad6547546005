"""
Segments: details, starring, efforts, leaderboards, explorer.
"""

from concurrent.futures import Future
from datetime import datetime
from typing import List, Optional, Tuple

from strava_mcp.api.model import (
    Segment,
    SegmentEffort,
    SegmentExplorerResponse,
    SegmentLeaderboard,
)
from strava_mcp.api.paging import Paging, fetch_all, fetch_page
from strava_mcp.api.service import StravaService, run_async
from strava_mcp.sdk import segments as sdk_segments
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient
from strava_mcp.sdk.types import (
    AgeGroup,
    ClimbCategory,
    ExplorerActivityType,
    Gender,
    LeaderboardDateRange,
    WeightClass,
)


class SegmentService(StravaService):
    """
    Segment facade. Caches segments and the efforts it lists.

    Get with SegmentService.instance(token).
    """

    def __init__(self, token: Token, client: StravaClient = None):
        super().__init__(token, client)
        self.segment_cache = self._cache(Segment)
        self.effort_cache = self._cache(SegmentEffort)

    def get_segment(self, segment_id: int) -> Optional[Segment]:
        """
        A segment by id.

        Returns None if the segment does not exist, and a META placeholder
        if it is private to another athlete.
        """
        return self._get_entity(
            self.segment_cache,
            segment_id,
            lambda: Segment.from_dict(sdk_segments.get_segment(self.client, segment_id)),
        )

    def star_segment(self, segment_id: int, starred: bool = True) -> Segment:
        """Star or unstar a segment and refresh the cached copy."""
        segment = Segment.from_dict(sdk_segments.star_segment(self.client, segment_id, starred))
        self.segment_cache.put(segment)
        return segment

    # ── Starred segments ─────────────────────────────────────────────────

    def list_authenticated_athlete_starred_segments(self, paging: Paging = None) -> List[Segment]:
        return self._list(
            self.segment_cache,
            paging,
            lambda p: [
                Segment.from_dict(s)
                for s in sdk_segments.list_authenticated_athlete_starred_segments(
                    self.client, p.page, p.page_size,
                )
            ],
        )

    def list_all_authenticated_athlete_starred_segments(self) -> List[Segment]:
        return fetch_all(self.list_authenticated_athlete_starred_segments)

    def list_starred_segments(self, athlete_id: int, paging: Paging = None) -> List[Segment]:
        return self._list(
            self.segment_cache,
            paging,
            lambda p: [
                Segment.from_dict(s)
                for s in sdk_segments.list_starred_segments(
                    self.client, athlete_id, p.page, p.page_size,
                )
            ],
        )

    def list_all_starred_segments(self, athlete_id: int) -> List[Segment]:
        return fetch_all(lambda p: self.list_starred_segments(athlete_id, p))

    # ── Efforts ──────────────────────────────────────────────────────────

    def list_segment_efforts(
        self,
        segment_id: int,
        athlete_id: int = None,
        start_date_local: datetime = None,
        end_date_local: datetime = None,
        paging: Paging = None,
    ) -> List[SegmentEffort]:
        """
        Efforts on a segment, sorted by start date, or by elapsed time when
        filtered to one athlete. The date range is inclusive local time.
        """
        return self._list(
            self.effort_cache,
            paging,
            lambda p: [
                SegmentEffort.from_dict(e)
                for e in sdk_segments.list_segment_efforts(
                    self.client,
                    segment_id,
                    athlete_id=athlete_id,
                    start_date_local=start_date_local,
                    end_date_local=end_date_local,
                    page=p.page,
                    per_page=p.page_size,
                )
            ],
        )

    def list_all_segment_efforts(
        self,
        segment_id: int,
        athlete_id: int = None,
        start_date_local: datetime = None,
        end_date_local: datetime = None,
    ) -> List[SegmentEffort]:
        return fetch_all(lambda p: self.list_segment_efforts(
            segment_id, athlete_id, start_date_local, end_date_local, paging=p,
        ))

    # ── Leaderboards ─────────────────────────────────────────────────────

    def get_segment_leaderboard(
        self,
        segment_id: int,
        gender: Gender = None,
        age_group: AgeGroup = None,
        weight_class: WeightClass = None,
        following: bool = None,
        club_id: int = None,
        date_range: LeaderboardDateRange = None,
        context_entries: int = None,
        paging: Paging = None,
    ) -> Optional[SegmentLeaderboard]:
        """
        One page of a segment leaderboard. Not cached.

        Returns None if the segment does not exist and an empty leaderboard
        if the token may not see it.
        """
        def page_fn(p: Paging) -> SegmentLeaderboard:
            return SegmentLeaderboard.from_dict(sdk_segments.get_segment_leaderboard(
                self.client,
                segment_id,
                gender=gender,
                age_group=age_group,
                weight_class=weight_class,
                following=following,
                club_id=club_id,
                date_range=date_range,
                context_entries=context_entries,
                page=p.page,
                per_page=p.page_size,
            ))

        return self._fetch(lambda: fetch_page(paging, page_fn), placeholder=SegmentLeaderboard)

    def get_all_segment_leaderboard(
        self,
        segment_id: int,
        gender: Gender = None,
        age_group: AgeGroup = None,
        weight_class: WeightClass = None,
        following: bool = None,
        club_id: int = None,
        date_range: LeaderboardDateRange = None,
    ) -> Optional[SegmentLeaderboard]:
        """
        The whole leaderboard: entries from every page, in rank order.

        Counts come from the first page. Returns None if the segment does
        not exist. Context entries are turned off so no row repeats across
        pages.
        """
        first: List[SegmentLeaderboard] = []

        def page_fn(p: Paging):
            board = self.get_segment_leaderboard(
                segment_id, gender, age_group, weight_class, following,
                club_id, date_range, context_entries=0, paging=p,
            )
            if board is None:
                return []
            if not first:
                first.append(board)
            return board.entries

        entries = fetch_all(page_fn)
        if not first:
            return None
        return SegmentLeaderboard(
            effort_count=first[0].effort_count,
            entry_count=first[0].entry_count,
            entries=entries,
        )

    # ── Explorer ─────────────────────────────────────────────────────────

    def segment_explore(
        self,
        southwest: Tuple[float, float],
        northeast: Tuple[float, float],
        activity_type: ExplorerActivityType = None,
        min_cat: ClimbCategory = None,
        max_cat: ClimbCategory = None,
    ) -> SegmentExplorerResponse:
        """Up to 10 popular segments inside the bounding box. Not paginated."""
        return SegmentExplorerResponse.from_dict(sdk_segments.explore_segments(
            self.client, southwest, northeast,
            activity_type=activity_type, min_cat=min_cat, max_cat=max_cat,
        ))

    # ── Async variants ───────────────────────────────────────────────────

    def get_segment_async(self, segment_id: int) -> "Future[Optional[Segment]]":
        return run_async(self.get_segment, segment_id)

    def star_segment_async(self, segment_id: int, starred: bool = True) -> "Future[Segment]":
        return run_async(self.star_segment, segment_id, starred)

    def list_authenticated_athlete_starred_segments_async(self, paging: Paging = None) -> "Future[List[Segment]]":
        return run_async(self.list_authenticated_athlete_starred_segments, paging)

    def list_all_authenticated_athlete_starred_segments_async(self) -> "Future[List[Segment]]":
        return run_async(self.list_all_authenticated_athlete_starred_segments)

    def list_starred_segments_async(self, athlete_id: int, paging: Paging = None) -> "Future[List[Segment]]":
        return run_async(self.list_starred_segments, athlete_id, paging)

    def list_all_starred_segments_async(self, athlete_id: int) -> "Future[List[Segment]]":
        return run_async(self.list_all_starred_segments, athlete_id)

    def list_segment_efforts_async(self, segment_id: int, **kwargs) -> "Future[List[SegmentEffort]]":
        return run_async(self.list_segment_efforts, segment_id, **kwargs)

    def list_all_segment_efforts_async(self, segment_id: int, **kwargs) -> "Future[List[SegmentEffort]]":
        return run_async(self.list_all_segment_efforts, segment_id, **kwargs)

    def get_segment_leaderboard_async(self, segment_id: int, **kwargs) -> "Future[Optional[SegmentLeaderboard]]":
        return run_async(self.get_segment_leaderboard, segment_id, **kwargs)

    def get_all_segment_leaderboard_async(self, segment_id: int, **kwargs) -> "Future[Optional[SegmentLeaderboard]]":
        return run_async(self.get_all_segment_leaderboard, segment_id, **kwargs)

    def segment_explore_async(self, southwest, northeast, **kwargs) -> "Future[SegmentExplorerResponse]":
        return run_async(self.segment_explore, southwest, northeast, **kwargs)
