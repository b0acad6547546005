"""
High-Level API — typed, cached service facades over the Strava SDK.

Every facade is bound to a Token: `AthleteService.instance(token)` returns
the same object for the same token, and all facades for a token share its
resource caches.

Modules:
    model      — Typed entities (Athlete, Segment, SegmentEffort, Activity, ...)
    cache      — Per-token, per-entity-type caches
    paging     — Paging instructions, single-page fetch, all-pages aggregation
    service    — Facade base class, fetch/downgrade policies, async wrapper
    athletes   — Profiles, friends, KOMs, statistics
    segments   — Segments, starring, efforts, leaderboards, explorer
    efforts    — Segment efforts by id
    activities — Activities, edits, photos
"""

# Model
from strava_mcp.api.model import (
    Entity,
    Athlete,
    Totals,
    Statistics,
    MapPoint,
    Segment,
    SegmentEffort,
    LeaderboardEntry,
    SegmentLeaderboard,
    ExplorerSegment,
    SegmentExplorerResponse,
    Activity,
    Photo,
)

# Core
from strava_mcp.api.cache import ResourceCache
from strava_mcp.api.paging import Paging, fetch_page, fetch_all
from strava_mcp.api.service import StravaService, run_async

# Facades
from strava_mcp.api.athletes import AthleteService
from strava_mcp.api.segments import SegmentService
from strava_mcp.api.efforts import SegmentEffortService
from strava_mcp.api.activities import ActivityService

__all__ = [
    # Model
    "Entity", "Athlete", "Totals", "Statistics", "MapPoint", "Segment",
    "SegmentEffort", "LeaderboardEntry", "SegmentLeaderboard", "ExplorerSegment",
    "SegmentExplorerResponse", "Activity", "Photo",
    # Core
    "ResourceCache", "Paging", "fetch_page", "fetch_all", "StravaService", "run_async",
    # Facades
    "AthleteService", "SegmentService", "SegmentEffortService", "ActivityService",
]
