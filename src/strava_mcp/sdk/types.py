"""
Strava API types, enums, and constants.

All Strava-specific codes and magic values live here.
Reference enums fall back to UNKNOWN when Strava sends a value
this package does not know about yet.
"""

from enum import Enum, IntEnum


class ResourceState(IntEnum):
    """How complete a representation of an entity is.

    Ordered: META < SUMMARY < DETAILED < UPDATED.
    """
    META = 1
    SUMMARY = 2
    DETAILED = 3
    UPDATED = 4

    @classmethod
    def parse(cls, value) -> "ResourceState":
        """Decode an API resource_state; missing or unknown means META."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.META


class _ReferenceEnum(Enum):
    """String-valued enum with an UNKNOWN fallback for unrecognised values."""

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


class Gender(_ReferenceEnum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "UNKNOWN"


class AgeGroup(_ReferenceEnum):
    """Leaderboard age group filter (premium athletes only)."""
    AGE0_24 = "0_24"
    AGE25_34 = "25_34"
    AGE35_44 = "35_44"
    AGE45_54 = "45_54"
    AGE55_64 = "55_64"
    AGE65_PLUS = "65_plus"
    UNKNOWN = "UNKNOWN"


class WeightClass(_ReferenceEnum):
    """Leaderboard weight class filter (premium athletes only)."""
    KG0_54 = "0_54"
    KG55_64 = "55_64"
    KG65_74 = "65_74"
    KG75_84 = "75_84"
    KG85_94 = "85_94"
    KG95_PLUS = "95_plus"
    LB0_124 = "0_124"
    LB125_149 = "125_149"
    LB150_164 = "150_164"
    LB165_179 = "165_179"
    LB180_199 = "180_199"
    LB200_PLUS = "200_plus"
    UNKNOWN = "UNKNOWN"


class LeaderboardDateRange(_ReferenceEnum):
    THIS_YEAR = "this_year"
    THIS_MONTH = "this_month"
    THIS_WEEK = "this_week"
    TODAY = "today"
    UNKNOWN = "UNKNOWN"


class ExplorerActivityType(_ReferenceEnum):
    """Segment explorer activity type; Strava defaults to riding."""
    RUNNING = "running"
    RIDING = "riding"
    UNKNOWN = "UNKNOWN"


class PhotoType(_ReferenceEnum):
    INSTAGRAM = "InstagramPhoto"
    UNKNOWN = "UNKNOWN"


class ActivityType(_ReferenceEnum):
    RIDE = "Ride"
    RUN = "Run"
    SWIM = "Swim"
    HIKE = "Hike"
    WALK = "Walk"
    ALPINE_SKI = "AlpineSki"
    BACKCOUNTRY_SKI = "BackcountrySki"
    CANOEING = "Canoeing"
    CROSSFIT = "Crossfit"
    E_BIKE_RIDE = "EBikeRide"
    ELLIPTICAL = "Elliptical"
    ICE_SKATE = "IceSkate"
    INLINE_SKATE = "InlineSkate"
    KAYAKING = "Kayaking"
    KITESURF = "Kitesurf"
    NORDIC_SKI = "NordicSki"
    ROCK_CLIMBING = "RockClimbing"
    ROLLER_SKI = "RollerSki"
    ROWING = "Rowing"
    SNOWBOARD = "Snowboard"
    SNOWSHOE = "Snowshoe"
    STAIR_STEPPER = "StairStepper"
    STAND_UP_PADDLING = "StandUpPaddling"
    SURFING = "Surfing"
    VIRTUAL_RIDE = "VirtualRide"
    WEIGHT_TRAINING = "WeightTraining"
    WINDSURF = "Windsurf"
    WORKOUT = "Workout"
    YOGA = "Yoga"
    UNKNOWN = "UNKNOWN"


class ClimbCategory(IntEnum):
    """Climb category: 0 is uncategorised, 5 is hors catégorie."""
    UNCATEGORIZED = 0
    CATEGORY4 = 1
    CATEGORY3 = 2
    CATEGORY2 = 3
    CATEGORY1 = 4
    HORS_CATEGORIE = 5


# Strava caps per_page at 200; without per_page it serves 30 per page.
MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 30

# Leaderboard context entries either side of the authenticated athlete (Strava serves 2 by default)
MAX_CONTEXT_ENTRIES = 15
