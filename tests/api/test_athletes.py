"""Tests for api/athletes.py — AthleteService caching and downgrades."""

import pytest
from unittest.mock import patch

from strava_mcp.api.athletes import AthleteService
from strava_mcp.api.model import Athlete, Statistics
from strava_mcp.api.paging import Paging
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.errors import (
    NotFoundError,
    RateLimitError,
    StravaApiError,
    TransportError,
    UnauthorizedError,
)
from strava_mcp.sdk.types import Gender, ResourceState

from tests.conftest import ACCESS_TOKEN, athlete_json, effort_json


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_caches(mock_sdk, token):
    mock_sdk.get_athlete.return_value = athlete_json(5, resource_state=2)
    service = AthleteService.instance(token)

    first = service.get_athlete(5)
    second = service.get_athlete(5)

    assert first is second
    assert first.firstname == "John"
    assert first.sex is Gender.MALE
    mock_sdk.get_athlete.assert_called_once()


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_refetches_meta_entry(mock_sdk, token):
    mock_sdk.get_athlete.return_value = athlete_json(5, resource_state=3)
    service = AthleteService.instance(token)
    service.athlete_cache.put(Athlete.meta(5))

    athlete = service.get_athlete(5)

    assert athlete.resource_state is ResourceState.DETAILED
    mock_sdk.get_athlete.assert_called_once()


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_not_found(mock_sdk, token):
    mock_sdk.get_athlete.side_effect = NotFoundError("Record Not Found", 404)
    assert AthleteService.instance(token).get_athlete(5) is None


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_private_gives_placeholder(mock_sdk, token):
    mock_sdk.get_athlete.side_effect = UnauthorizedError("Forbidden", 403)

    athlete = AthleteService.instance(token).get_athlete(5)

    assert athlete.id == 5
    assert athlete.is_meta
    assert athlete.firstname is None


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_bad_token_raises(mock_sdk, invalid_token):
    mock_sdk.get_athlete.side_effect = UnauthorizedError("Authorization Error", 401)
    with pytest.raises(UnauthorizedError):
        AthleteService.instance(invalid_token).get_athlete(5)


@pytest.mark.parametrize("error", [
    TransportError("Connection refused"),
    RateLimitError("Rate Limit Exceeded", 429),
    StravaApiError("Internal Server Error", 500),
])
@patch("strava_mcp.api.athletes.sdk_athletes")
def test_get_athlete_other_errors_pass_through(mock_sdk, token, error):
    mock_sdk.get_athlete.side_effect = error
    service = AthleteService.instance(token)

    with pytest.raises(type(error)) as exc_info:
        service.get_athlete(5)

    assert exc_info.value is error
    assert 5 not in service.athlete_cache


class TestAuthenticatedAthlete:
    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_sets_token_athlete_id(self, mock_sdk):
        token = Token(ACCESS_TOKEN)
        mock_sdk.get_authenticated_athlete.return_value = athlete_json(227615)

        athlete = AthleteService.instance(token).get_authenticated_athlete()

        assert athlete.id == 227615
        assert token.athlete_id == 227615

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_served_from_cache(self, mock_sdk, token):
        mock_sdk.get_authenticated_athlete.return_value = athlete_json(token.athlete_id)
        service = AthleteService.instance(token)

        service.get_authenticated_athlete()
        service.get_authenticated_athlete()

        mock_sdk.get_authenticated_athlete.assert_called_once()
        assert service.get_athlete(token.athlete_id).firstname == "John"
        mock_sdk.get_athlete.assert_not_called()

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_unauthorized_always_raises(self, mock_sdk, token):
        mock_sdk.get_authenticated_athlete.side_effect = UnauthorizedError("Authorization Error", 401)
        with pytest.raises(UnauthorizedError):
            AthleteService.instance(token).get_authenticated_athlete()


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_update_refreshes_cache(mock_sdk, token):
    mock_sdk.get_authenticated_athlete.return_value = athlete_json(token.athlete_id, city="San Francisco")
    mock_sdk.update_authenticated_athlete.return_value = athlete_json(token.athlete_id, city="Oakland")
    service = AthleteService.instance(token)
    service.get_authenticated_athlete()

    service.update_authenticated_athlete(city="Oakland")

    assert service.get_authenticated_athlete().city == "Oakland"
    mock_sdk.get_authenticated_athlete.assert_called_once()


class TestStatistics:
    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_parses_totals(self, mock_sdk, token):
        mock_sdk.get_athlete_statistics.return_value = {
            "biggest_ride_distance": 175454.0,
            "recent_run_totals": {"count": 3, "distance": 21000.0, "moving_time": 6300},
        }

        stats = AthleteService.instance(token).statistics(5)

        assert stats.biggest_ride_distance == 175454.0
        assert stats.recent_run_totals.count == 3
        assert stats.all_swim_totals.count == 0

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_private_gives_empty_statistics(self, mock_sdk, token):
        mock_sdk.get_athlete_statistics.side_effect = UnauthorizedError("Forbidden", 403)
        assert AthleteService.instance(token).statistics(5) == Statistics()

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_not_cached(self, mock_sdk, token):
        mock_sdk.get_athlete_statistics.return_value = {}
        service = AthleteService.instance(token)
        service.statistics(5)
        service.statistics(5)
        assert mock_sdk.get_athlete_statistics.call_count == 2


class TestLists:
    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_friends_written_through(self, mock_sdk, token):
        mock_sdk.list_authenticated_athlete_friends.return_value = [
            athlete_json(1, resource_state=2), athlete_json(2, resource_state=2),
        ]
        service = AthleteService.instance(token)

        friends = service.list_authenticated_athlete_friends(Paging(1, 2))

        assert [f.id for f in friends] == [1, 2]
        assert service.get_athlete(2) is friends[1]
        mock_sdk.get_athlete.assert_not_called()
        mock_sdk.list_authenticated_athlete_friends.assert_called_once_with(service.client, 1, 2)

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_lists_never_served_from_cache(self, mock_sdk, token):
        mock_sdk.list_athlete_friends.return_value = [athlete_json(1)]
        service = AthleteService.instance(token)
        service.list_athlete_friends(5)
        service.list_athlete_friends(5)
        assert mock_sdk.list_athlete_friends.call_count == 2

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_list_not_found_propagates(self, mock_sdk, token):
        mock_sdk.list_athletes_both_following.side_effect = NotFoundError("Record Not Found", 404)
        with pytest.raises(NotFoundError):
            AthleteService.instance(token).list_athletes_both_following(5)

    @patch("strava_mcp.api.athletes.sdk_athletes")
    def test_list_all_koms_walks_pages(self, mock_sdk, token, monkeypatch):
        monkeypatch.setenv("STRAVA_LIST_ALL_PAGE_SIZE", "2")
        mock_sdk.list_athlete_koms.side_effect = [
            [effort_json(1), effort_json(2)],
            [effort_json(3)],
        ]
        service = AthleteService.instance(token)

        koms = service.list_all_athlete_koms(5)

        assert [k.id for k in koms] == [1, 2, 3]
        assert mock_sdk.list_athlete_koms.call_count == 2
        assert len(service.effort_cache) == 3


@patch("strava_mcp.api.athletes.sdk_athletes")
def test_async_variant(mock_sdk, token):
    mock_sdk.get_athlete.return_value = athlete_json(5)
    future = AthleteService.instance(token).get_athlete_async(5)
    assert future.result(timeout=5).id == 5
