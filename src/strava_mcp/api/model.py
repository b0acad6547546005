"""
Domain types for the Strava API.

Every cacheable entity carries its id and an explicit ResourceState tag,
so the service layer can tell a placeholder from a full representation
without inspecting fields. Timestamps stay as the ISO strings Strava sends.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from strava_mcp.sdk.types import (
    ActivityType,
    ClimbCategory,
    Gender,
    PhotoType,
    ResourceState,
)


@dataclass
class Entity:
    """Base for anything with an id and a representation level."""
    id: Optional[int] = None
    resource_state: ResourceState = ResourceState.META

    @classmethod
    def meta(cls, entity_id: int):
        """Placeholder that carries nothing but the id."""
        return cls(id=entity_id, resource_state=ResourceState.META)

    @property
    def is_meta(self) -> bool:
        return self.resource_state <= ResourceState.META


@dataclass
class Athlete(Entity):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    profile_medium: Optional[str] = None
    profile: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    sex: Optional[Gender] = None
    premium: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    follower_count: Optional[int] = None
    friend_count: Optional[int] = None
    mutual_friend_count: Optional[int] = None
    measurement_preference: Optional[str] = None
    email: Optional[str] = None
    ftp: Optional[int] = None
    weight: Optional[float] = None

    @classmethod
    def from_dict(cls, d: dict) -> "Athlete":
        return cls(
            id=d.get("id"),
            resource_state=ResourceState.parse(d.get("resource_state")),
            firstname=d.get("firstname"),
            lastname=d.get("lastname"),
            profile_medium=d.get("profile_medium"),
            profile=d.get("profile"),
            city=d.get("city"),
            state=d.get("state"),
            country=d.get("country"),
            sex=Gender(d["sex"]) if d.get("sex") else None,
            premium=d.get("premium"),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
            follower_count=d.get("follower_count"),
            friend_count=d.get("friend_count"),
            mutual_friend_count=d.get("mutual_friend_count"),
            measurement_preference=d.get("measurement_preference"),
            email=d.get("email"),
            ftp=d.get("ftp"),
            weight=d.get("weight"),
        )

    @property
    def name(self) -> Optional[str]:
        parts = [p for p in (self.firstname, self.lastname) if p]
        return " ".join(parts) or None


@dataclass
class Totals:
    """Activity totals over a period (recent, year to date, all time)."""
    count: int = 0
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    elevation_gain: float = 0.0
    achievement_count: Optional[int] = None

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> "Totals":
        d = d or {}
        return cls(
            count=d.get("count", 0),
            distance=d.get("distance", 0.0),
            moving_time=d.get("moving_time", 0),
            elapsed_time=d.get("elapsed_time", 0),
            elevation_gain=d.get("elevation_gain", 0.0),
            achievement_count=d.get("achievement_count"),
        )


@dataclass
class Statistics:
    """Athlete statistics. Has no id of its own, so it is never cached."""
    biggest_ride_distance: Optional[float] = None
    biggest_climb_elevation_gain: Optional[float] = None
    recent_ride_totals: Totals = field(default_factory=Totals)
    recent_run_totals: Totals = field(default_factory=Totals)
    recent_swim_totals: Totals = field(default_factory=Totals)
    ytd_ride_totals: Totals = field(default_factory=Totals)
    ytd_run_totals: Totals = field(default_factory=Totals)
    ytd_swim_totals: Totals = field(default_factory=Totals)
    all_ride_totals: Totals = field(default_factory=Totals)
    all_run_totals: Totals = field(default_factory=Totals)
    all_swim_totals: Totals = field(default_factory=Totals)

    @classmethod
    def from_dict(cls, d: dict) -> "Statistics":
        return cls(
            biggest_ride_distance=d.get("biggest_ride_distance"),
            biggest_climb_elevation_gain=d.get("biggest_climb_elevation_gain"),
            **{
                name: Totals.from_dict(d.get(name))
                for name in _TOTALS_FIELDS
            },
        )


_TOTALS_FIELDS = [
    f"{period}_{sport}_totals"
    for period in ("recent", "ytd", "all")
    for sport in ("ride", "run", "swim")
]


@dataclass
class MapPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_list(cls, latlng: Optional[list]) -> Optional["MapPoint"]:
        if not latlng or len(latlng) != 2:
            return None
        return cls(latitude=latlng[0], longitude=latlng[1])

    def as_tuple(self):
        return (self.latitude, self.longitude)


@dataclass
class Segment(Entity):
    name: Optional[str] = None
    activity_type: Optional[ActivityType] = None
    distance: Optional[float] = None
    average_grade: Optional[float] = None
    maximum_grade: Optional[float] = None
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None
    total_elevation_gain: Optional[float] = None
    start_latlng: Optional[MapPoint] = None
    end_latlng: Optional[MapPoint] = None
    climb_category: Optional[ClimbCategory] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    private: Optional[bool] = None
    hazardous: Optional[bool] = None
    starred: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    effort_count: Optional[int] = None
    athlete_count: Optional[int] = None
    star_count: Optional[int] = None

    @classmethod
    def from_dict(cls, d: dict) -> "Segment":
        return cls(
            id=d.get("id"),
            resource_state=ResourceState.parse(d.get("resource_state")),
            name=d.get("name"),
            activity_type=ActivityType(d["activity_type"]) if d.get("activity_type") else None,
            distance=d.get("distance"),
            average_grade=d.get("average_grade"),
            maximum_grade=d.get("maximum_grade"),
            elevation_high=d.get("elevation_high"),
            elevation_low=d.get("elevation_low"),
            total_elevation_gain=d.get("total_elevation_gain"),
            start_latlng=MapPoint.from_list(d.get("start_latlng")),
            end_latlng=MapPoint.from_list(d.get("end_latlng")),
            climb_category=_climb_category(d.get("climb_category")),
            city=d.get("city"),
            state=d.get("state"),
            country=d.get("country"),
            private=d.get("private"),
            hazardous=d.get("hazardous"),
            starred=d.get("starred"),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
            effort_count=d.get("effort_count"),
            athlete_count=d.get("athlete_count"),
            star_count=d.get("star_count"),
        )


@dataclass
class SegmentEffort(Entity):
    name: Optional[str] = None
    activity_id: Optional[int] = None
    athlete_id: Optional[int] = None
    segment: Optional[Segment] = None
    elapsed_time: Optional[int] = None
    moving_time: Optional[int] = None
    start_date: Optional[str] = None
    start_date_local: Optional[str] = None
    distance: Optional[float] = None
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    average_cadence: Optional[float] = None
    average_watts: Optional[float] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    kom_rank: Optional[int] = None
    pr_rank: Optional[int] = None
    hidden: Optional[bool] = None

    @classmethod
    def from_dict(cls, d: dict) -> "SegmentEffort":
        return cls(
            id=d.get("id"),
            resource_state=ResourceState.parse(d.get("resource_state")),
            name=d.get("name"),
            activity_id=_nested_id(d.get("activity")),
            athlete_id=_nested_id(d.get("athlete")),
            segment=Segment.from_dict(d["segment"]) if d.get("segment") else None,
            elapsed_time=d.get("elapsed_time"),
            moving_time=d.get("moving_time"),
            start_date=d.get("start_date"),
            start_date_local=d.get("start_date_local"),
            distance=d.get("distance"),
            start_index=d.get("start_index"),
            end_index=d.get("end_index"),
            average_cadence=d.get("average_cadence"),
            average_watts=d.get("average_watts"),
            average_heartrate=d.get("average_heartrate"),
            max_heartrate=d.get("max_heartrate"),
            kom_rank=d.get("kom_rank"),
            pr_rank=d.get("pr_rank"),
            hidden=d.get("hidden"),
        )


@dataclass
class LeaderboardEntry:
    athlete_name: Optional[str] = None
    athlete_id: Optional[int] = None
    athlete_gender: Optional[Gender] = None
    average_hr: Optional[float] = None
    average_watts: Optional[float] = None
    distance: Optional[float] = None
    elapsed_time: Optional[int] = None
    moving_time: Optional[int] = None
    start_date: Optional[str] = None
    start_date_local: Optional[str] = None
    activity_id: Optional[int] = None
    effort_id: Optional[int] = None
    rank: Optional[int] = None

    @classmethod
    def from_dict(cls, d: dict) -> "LeaderboardEntry":
        return cls(
            athlete_name=d.get("athlete_name"),
            athlete_id=d.get("athlete_id"),
            athlete_gender=Gender(d["athlete_gender"]) if d.get("athlete_gender") else None,
            average_hr=d.get("average_hr"),
            average_watts=d.get("average_watts"),
            distance=d.get("distance"),
            elapsed_time=d.get("elapsed_time"),
            moving_time=d.get("moving_time"),
            start_date=d.get("start_date"),
            start_date_local=d.get("start_date_local"),
            activity_id=d.get("activity_id"),
            effort_id=d.get("effort_id"),
            rank=d.get("rank"),
        )


@dataclass
class SegmentLeaderboard:
    """A leaderboard page, or every page when fetched with get_all_*."""
    effort_count: Optional[int] = None
    entry_count: Optional[int] = None
    entries: List[LeaderboardEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> "SegmentLeaderboard":
        return cls(
            effort_count=d.get("effort_count"),
            entry_count=d.get("entry_count"),
            entries=[LeaderboardEntry.from_dict(e) for e in d.get("entries") or []],
        )


@dataclass
class ExplorerSegment:
    id: Optional[int] = None
    name: Optional[str] = None
    climb_category: Optional[ClimbCategory] = None
    avg_grade: Optional[float] = None
    start_latlng: Optional[MapPoint] = None
    end_latlng: Optional[MapPoint] = None
    elev_difference: Optional[float] = None
    distance: Optional[float] = None
    points: Optional[str] = None

    @classmethod
    def from_dict(cls, d: dict) -> "ExplorerSegment":
        return cls(
            id=d.get("id"),
            name=d.get("name"),
            climb_category=_climb_category(d.get("climb_category")),
            avg_grade=d.get("avg_grade"),
            start_latlng=MapPoint.from_list(d.get("start_latlng")),
            end_latlng=MapPoint.from_list(d.get("end_latlng")),
            elev_difference=d.get("elev_difference"),
            distance=d.get("distance"),
            points=d.get("points"),
        )


@dataclass
class SegmentExplorerResponse:
    segments: List[ExplorerSegment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> "SegmentExplorerResponse":
        return cls(segments=[ExplorerSegment.from_dict(s) for s in d.get("segments") or []])


@dataclass
class Activity(Entity):
    name: Optional[str] = None
    athlete_id: Optional[int] = None
    type: Optional[ActivityType] = None
    distance: Optional[float] = None
    moving_time: Optional[int] = None
    elapsed_time: Optional[int] = None
    total_elevation_gain: Optional[float] = None
    start_date: Optional[str] = None
    start_date_local: Optional[str] = None
    timezone: Optional[str] = None
    average_speed: Optional[float] = None
    max_speed: Optional[float] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    average_watts: Optional[float] = None
    kilojoules: Optional[float] = None
    calories: Optional[float] = None
    achievement_count: Optional[int] = None
    kudos_count: Optional[int] = None
    comment_count: Optional[int] = None
    photo_count: Optional[int] = None
    private: Optional[bool] = None
    commute: Optional[bool] = None
    trainer: Optional[bool] = None
    gear_id: Optional[str] = None
    description: Optional[str] = None
    external_id: Optional[str] = None
    segment_efforts: List[SegmentEffort] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> "Activity":
        return cls(
            id=d.get("id"),
            resource_state=ResourceState.parse(d.get("resource_state")),
            name=d.get("name"),
            athlete_id=_nested_id(d.get("athlete")),
            type=ActivityType(d["type"]) if d.get("type") else None,
            distance=d.get("distance"),
            moving_time=d.get("moving_time"),
            elapsed_time=d.get("elapsed_time"),
            total_elevation_gain=d.get("total_elevation_gain"),
            start_date=d.get("start_date"),
            start_date_local=d.get("start_date_local"),
            timezone=d.get("timezone"),
            average_speed=d.get("average_speed"),
            max_speed=d.get("max_speed"),
            average_heartrate=d.get("average_heartrate"),
            max_heartrate=d.get("max_heartrate"),
            average_watts=d.get("average_watts"),
            kilojoules=d.get("kilojoules"),
            calories=d.get("calories"),
            achievement_count=d.get("achievement_count"),
            kudos_count=d.get("kudos_count"),
            comment_count=d.get("comment_count"),
            photo_count=d.get("total_photo_count", d.get("photo_count")),
            private=d.get("private"),
            commute=d.get("commute"),
            trainer=d.get("trainer"),
            gear_id=d.get("gear_id"),
            description=d.get("description"),
            external_id=d.get("external_id"),
            segment_efforts=[
                SegmentEffort.from_dict(e) for e in d.get("segment_efforts") or []
            ],
        )


@dataclass
class Photo(Entity):
    activity_id: Optional[int] = None
    unique_id: Optional[str] = None
    type: Optional[PhotoType] = None
    caption: Optional[str] = None
    ref: Optional[str] = None
    uploaded_at: Optional[str] = None
    created_at: Optional[str] = None
    urls: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> "Photo":
        return cls(
            id=d.get("id"),
            resource_state=ResourceState.parse(d.get("resource_state")),
            activity_id=d.get("activity_id"),
            unique_id=d.get("unique_id") or d.get("uid"),
            type=PhotoType(d["type"]) if d.get("type") else None,
            caption=d.get("caption"),
            ref=d.get("ref"),
            uploaded_at=d.get("uploaded_at"),
            created_at=d.get("created_at"),
            urls=d.get("urls") or {},
        )


def _nested_id(d) -> Optional[int]:
    """Strava nests references as {"id": ..., "resource_state": 1}."""
    if isinstance(d, dict):
        return d.get("id")
    return None


def _climb_category(value) -> Optional[ClimbCategory]:
    if value is None:
        return None
    try:
        return ClimbCategory(int(value))
    except (TypeError, ValueError):
        return None
