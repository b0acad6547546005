"""
Athletes: profiles, friends, KOMs, statistics.
"""

from concurrent.futures import Future
from typing import List, Optional

from strava_mcp.api.model import Athlete, SegmentEffort, Statistics
from strava_mcp.api.paging import Paging, fetch_all
from strava_mcp.api.service import StravaService, run_async
from strava_mcp.sdk import athletes as sdk_athletes
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient
from strava_mcp.sdk.types import Gender


class AthleteService(StravaService):
    """
    Athlete facade. Caches athletes and the KOM efforts it lists.

    Get with AthleteService.instance(token).
    """

    def __init__(self, token: Token, client: StravaClient = None):
        super().__init__(token, client)
        self.athlete_cache = self._cache(Athlete)
        self.effort_cache = self._cache(SegmentEffort)

    # ── Single athletes ──────────────────────────────────────────────────

    def get_athlete(self, athlete_id: int) -> Optional[Athlete]:
        """
        An athlete by id.

        Returns None if the athlete does not exist, and a META placeholder
        if the token may not see them.
        """
        return self._get_entity(
            self.athlete_cache,
            athlete_id,
            lambda: Athlete.from_dict(sdk_athletes.get_athlete(self.client, athlete_id)),
        )

    def get_authenticated_athlete(self) -> Athlete:
        """The athlete who owns the token. Authorization errors always propagate."""
        if self.token.athlete_id is not None:
            athlete = self.athlete_cache.get(self.token.athlete_id)
            if athlete is not None and not athlete.is_meta:
                return athlete

        athlete = Athlete.from_dict(sdk_athletes.get_authenticated_athlete(self.client))
        if self.token.athlete_id is None:
            self.token.athlete_id = athlete.id

        self.athlete_cache.put(athlete)
        return athlete

    def update_authenticated_athlete(
        self,
        city: str = None,
        state: str = None,
        country: str = None,
        sex: Gender = None,
        weight: float = None,
    ) -> Athlete:
        """Update the token owner's profile and refresh the cached copy."""
        athlete = Athlete.from_dict(sdk_athletes.update_authenticated_athlete(
            self.client, city=city, state=state, country=country, sex=sex, weight=weight,
        ))
        self.athlete_cache.put(athlete)
        return athlete

    def statistics(self, athlete_id: int) -> Optional[Statistics]:
        """
        Totals for an athlete. Not cached.

        Returns None if the athlete does not exist and empty statistics if
        the token may not see them.
        """
        return self._fetch(
            lambda: Statistics.from_dict(sdk_athletes.get_athlete_statistics(self.client, athlete_id)),
            placeholder=Statistics,
        )

    # ── Friends and followers ────────────────────────────────────────────

    def list_authenticated_athlete_friends(self, paging: Paging = None) -> List[Athlete]:
        return self._list(
            self.athlete_cache,
            paging,
            lambda p: [
                Athlete.from_dict(a)
                for a in sdk_athletes.list_authenticated_athlete_friends(
                    self.client, p.page, p.page_size,
                )
            ],
        )

    def list_all_authenticated_athlete_friends(self) -> List[Athlete]:
        return fetch_all(self.list_authenticated_athlete_friends)

    def list_athlete_friends(self, athlete_id: int, paging: Paging = None) -> List[Athlete]:
        return self._list(
            self.athlete_cache,
            paging,
            lambda p: [
                Athlete.from_dict(a)
                for a in sdk_athletes.list_athlete_friends(
                    self.client, athlete_id, p.page, p.page_size,
                )
            ],
        )

    def list_all_athlete_friends(self, athlete_id: int) -> List[Athlete]:
        return fetch_all(lambda p: self.list_athlete_friends(athlete_id, p))

    def list_athletes_both_following(self, athlete_id: int, paging: Paging = None) -> List[Athlete]:
        return self._list(
            self.athlete_cache,
            paging,
            lambda p: [
                Athlete.from_dict(a)
                for a in sdk_athletes.list_athletes_both_following(
                    self.client, athlete_id, p.page, p.page_size,
                )
            ],
        )

    def list_all_athletes_both_following(self, athlete_id: int) -> List[Athlete]:
        return fetch_all(lambda p: self.list_athletes_both_following(athlete_id, p))

    # ── KOMs ─────────────────────────────────────────────────────────────

    def list_athlete_koms(self, athlete_id: int, paging: Paging = None) -> List[SegmentEffort]:
        return self._list(
            self.effort_cache,
            paging,
            lambda p: [
                SegmentEffort.from_dict(e)
                for e in sdk_athletes.list_athlete_koms(
                    self.client, athlete_id, p.page, p.page_size,
                )
            ],
        )

    def list_all_athlete_koms(self, athlete_id: int) -> List[SegmentEffort]:
        return fetch_all(lambda p: self.list_athlete_koms(athlete_id, p))

    # ── Async variants ───────────────────────────────────────────────────

    def get_athlete_async(self, athlete_id: int) -> "Future[Optional[Athlete]]":
        return run_async(self.get_athlete, athlete_id)

    def get_authenticated_athlete_async(self) -> "Future[Athlete]":
        return run_async(self.get_authenticated_athlete)

    def update_authenticated_athlete_async(self, **fields) -> "Future[Athlete]":
        return run_async(self.update_authenticated_athlete, **fields)

    def statistics_async(self, athlete_id: int) -> "Future[Optional[Statistics]]":
        return run_async(self.statistics, athlete_id)

    def list_authenticated_athlete_friends_async(self, paging: Paging = None) -> "Future[List[Athlete]]":
        return run_async(self.list_authenticated_athlete_friends, paging)

    def list_all_authenticated_athlete_friends_async(self) -> "Future[List[Athlete]]":
        return run_async(self.list_all_authenticated_athlete_friends)

    def list_athlete_friends_async(self, athlete_id: int, paging: Paging = None) -> "Future[List[Athlete]]":
        return run_async(self.list_athlete_friends, athlete_id, paging)

    def list_all_athlete_friends_async(self, athlete_id: int) -> "Future[List[Athlete]]":
        return run_async(self.list_all_athlete_friends, athlete_id)

    def list_athletes_both_following_async(self, athlete_id: int, paging: Paging = None) -> "Future[List[Athlete]]":
        return run_async(self.list_athletes_both_following, athlete_id, paging)

    def list_all_athletes_both_following_async(self, athlete_id: int) -> "Future[List[Athlete]]":
        return run_async(self.list_all_athletes_both_following, athlete_id)

    def list_athlete_koms_async(self, athlete_id: int, paging: Paging = None) -> "Future[List[SegmentEffort]]":
        return run_async(self.list_athlete_koms, athlete_id, paging)

    def list_all_athlete_koms_async(self, athlete_id: int) -> "Future[List[SegmentEffort]]":
        return run_async(self.list_all_athlete_koms, athlete_id)
