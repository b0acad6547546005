"""Tests for SDK segment endpoint functions."""

from datetime import datetime

import pytest
from unittest.mock import Mock

from strava_mcp.sdk import segments
from strava_mcp.sdk.types import (
    AgeGroup,
    ClimbCategory,
    ExplorerActivityType,
    Gender,
    LeaderboardDateRange,
    WeightClass,
)


def _client(return_value=None):
    client = Mock()
    client.make_request.return_value = return_value
    return client


def test_get_segment():
    client = _client({"id": 229781})
    segments.get_segment(client, 229781)
    client.make_request.assert_called_once_with("GET", "segments/229781")


def test_starred_segments_endpoints():
    client = _client([])
    segments.list_authenticated_athlete_starred_segments(client, 1, 20)
    assert client.make_request.call_args.args == ("GET", "segments/starred")
    assert client.make_request.call_args.kwargs["params"] == {"page": 1, "per_page": 20}

    segments.list_starred_segments(client, 5)
    assert client.make_request.call_args.args == ("GET", "athletes/5/segments/starred")


def test_star_segment_sends_flag():
    client = _client({"id": 1, "starred": False})
    segments.star_segment(client, 1, False)
    client.make_request.assert_called_once_with(
        "PUT", "segments/1/starred", data={"starred": "false"},
    )


class TestListSegmentEfforts:
    def test_date_range_formatted(self):
        client = _client([])
        segments.list_segment_efforts(
            client, 1,
            athlete_id=5,
            start_date_local=datetime(2026, 1, 1),
            end_date_local=datetime(2026, 1, 31, 23, 59, 59),
        )

        params = client.make_request.call_args.kwargs["params"]
        assert client.make_request.call_args.args == ("GET", "segments/1/all_efforts")
        assert params["athlete_id"] == 5
        assert params["start_date_local"] == "2026-01-01T00:00:00Z"
        assert params["end_date_local"] == "2026-01-31T23:59:59Z"

    def test_no_filters(self):
        client = _client([])
        segments.list_segment_efforts(client, 1)
        params = client.make_request.call_args.kwargs["params"]
        assert "start_date_local" not in params
        assert params["athlete_id"] is None

    def test_half_open_range_rejected(self):
        client = _client([])
        with pytest.raises(ValueError, match="together"):
            segments.list_segment_efforts(client, 1, start_date_local=datetime(2026, 1, 1))
        client.make_request.assert_not_called()


def test_leaderboard_filters():
    client = _client({"entries": []})
    segments.get_segment_leaderboard(
        client, 1,
        gender=Gender.FEMALE,
        age_group=AgeGroup.AGE35_44,
        weight_class=WeightClass.KG55_64,
        following=True,
        club_id=7,
        date_range=LeaderboardDateRange.THIS_YEAR,
        context_entries=5,
        page=2,
        per_page=50,
    )

    assert client.make_request.call_args.args == ("GET", "segments/1/leaderboard")
    assert client.make_request.call_args.kwargs["params"] == {
        "page": 2,
        "per_page": 50,
        "gender": "F",
        "age_group": "35_44",
        "weight_class": "55_64",
        "following": "true",
        "club_id": 7,
        "date_range": "this_year",
        "context_entries": 5,
    }


def test_explore_segments_bounds():
    client = _client({"segments": []})
    segments.explore_segments(
        client, (37.8, -122.5), (37.9, -122.4),
        activity_type=ExplorerActivityType.RUNNING,
        min_cat=ClimbCategory.UNCATEGORIZED,
        max_cat=ClimbCategory.CATEGORY2,
    )

    params = client.make_request.call_args.kwargs["params"]
    assert params["bounds"] == "37.8,-122.5,37.9,-122.4"
    assert params["activity_type"] == "running"
    assert params["min_cat"] == 0
    assert params["max_cat"] == 3
