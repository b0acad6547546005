"""Tests for api/activities.py — ActivityService."""

from unittest.mock import patch

import pytest

from strava_mcp.api.activities import ActivityService
from strava_mcp.api.paging import Paging
from strava_mcp.sdk.errors import NotFoundError, UnauthorizedError
from strava_mcp.sdk.types import ActivityType, PhotoType

from tests.conftest import activity_json, effort_json


@patch("strava_mcp.api.activities.sdk_activities")
def test_get_activity_caches_embedded_efforts(mock_sdk, token):
    mock_sdk.get_activity.return_value = activity_json(
        segment_efforts=[effort_json(11), effort_json(12)],
    )
    service = ActivityService.instance(token)

    activity = service.get_activity(321934, include_all_efforts=True)

    assert activity.type is ActivityType.RUN
    assert activity.athlete_id == 227615
    assert len(activity.segment_efforts) == 2
    assert 11 in service.effort_cache and 12 in service.effort_cache
    mock_sdk.get_activity.assert_called_once_with(service.client, 321934, include_all_efforts=True)


@patch("strava_mcp.api.activities.sdk_activities")
def test_get_activity_detailed_hit_makes_no_call(mock_sdk, token):
    mock_sdk.get_activity.return_value = activity_json()
    service = ActivityService.instance(token)
    service.get_activity(321934)
    service.get_activity(321934)
    mock_sdk.get_activity.assert_called_once()


@patch("strava_mcp.api.activities.sdk_activities")
def test_get_activity_downgrades(mock_sdk, token):
    service = ActivityService.instance(token)

    mock_sdk.get_activity.side_effect = NotFoundError("Record Not Found", 404)
    assert service.get_activity(1) is None

    mock_sdk.get_activity.side_effect = UnauthorizedError("Forbidden", 403)
    assert service.get_activity(2).is_meta


@patch("strava_mcp.api.activities.sdk_activities")
def test_list_activities(mock_sdk, token):
    mock_sdk.list_authenticated_athlete_activities.return_value = [
        activity_json(1, resource_state=2), activity_json(2, resource_state=2),
    ]
    service = ActivityService.instance(token)

    activities = service.list_authenticated_athlete_activities(
        before=1770768000, after=1770000000, paging=Paging(2, 10),
    )

    assert [a.id for a in activities] == [1, 2]
    assert service.activity_cache.get(1) is activities[0]
    mock_sdk.list_authenticated_athlete_activities.assert_called_once_with(
        service.client, before=1770768000, after=1770000000, page=2, per_page=10,
    )


@patch("strava_mcp.api.activities.sdk_activities")
def test_list_all_activities(mock_sdk, token):
    mock_sdk.list_authenticated_athlete_activities.side_effect = [
        [activity_json(i, resource_state=2) for i in range(1, 201)],
        [activity_json(201, resource_state=2)],
    ]

    activities = ActivityService.instance(token).list_all_authenticated_athlete_activities(after=1770000000)

    assert len(activities) == 201
    pages = [c.kwargs["page"] for c in mock_sdk.list_authenticated_athlete_activities.call_args_list]
    assert pages == [1, 2]


@patch("strava_mcp.api.activities.sdk_activities")
def test_update_activity(mock_sdk, token):
    mock_sdk.update_activity.return_value = activity_json(name="Lunch Run")
    service = ActivityService.instance(token)

    activity = service.update_activity(321934, name="Lunch Run", activity_type=ActivityType.RUN)

    assert activity.name == "Lunch Run"
    assert service.get_activity(321934) is activity
    mock_sdk.get_activity.assert_not_called()


@patch("strava_mcp.api.activities.sdk_activities")
def test_update_activity_unauthorized_raises(mock_sdk, token):
    mock_sdk.update_activity.side_effect = UnauthorizedError("Forbidden", 403)
    with pytest.raises(UnauthorizedError):
        ActivityService.instance(token).update_activity(1, name="x")


@patch("strava_mcp.api.activities.sdk_activities")
def test_list_activity_photos(mock_sdk, token):
    mock_sdk.list_activity_photos.return_value = [
        {"id": 7, "activity_id": 321934, "uid": "abc", "type": "InstagramPhoto",
         "caption": "View", "urls": {"100": "https://example.test/p.jpg"}},
    ]

    photos = ActivityService.instance(token).list_activity_photos(321934)

    assert photos[0].unique_id == "abc"
    assert photos[0].type is PhotoType.INSTAGRAM
    assert photos[0].urls["100"].endswith("p.jpg")


@patch("strava_mcp.api.activities.sdk_activities")
def test_photos_for_missing_activity(mock_sdk, token):
    mock_sdk.list_activity_photos.side_effect = NotFoundError("Record Not Found", 404)
    assert ActivityService.instance(token).list_activity_photos(1) is None
