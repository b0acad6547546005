"""Tests for api/service.py — facade registry, fetch policies, async wrapper."""

import threading

import pytest
from unittest.mock import Mock

from strava_mcp.api.activities import ActivityService
from strava_mcp.api.athletes import AthleteService
from strava_mcp.api.cache import ResourceCache
from strava_mcp.api.efforts import SegmentEffortService
from strava_mcp.api.model import Athlete, SegmentEffort
from strava_mcp.api.segments import SegmentService
from strava_mcp.api.service import StravaService, run_async
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.errors import NotFoundError, UnauthorizedError
from strava_mcp.sdk.types import ResourceState

from tests.conftest import ACCESS_TOKEN


class TestInstance:
    def test_same_token_same_facade(self, token):
        assert AthleteService.instance(token) is AthleteService.instance(token)

    def test_different_tokens_different_facades(self, token):
        other = Token(ACCESS_TOKEN)
        assert AthleteService.instance(token) is not AthleteService.instance(other)

    def test_facade_kinds_are_distinct(self, token):
        assert AthleteService.instance(token) is not SegmentService.instance(token)

    def test_facades_share_entity_caches(self, token):
        athletes = AthleteService.instance(token)
        segments = SegmentService.instance(token)
        efforts = SegmentEffortService.instance(token)
        activities = ActivityService.instance(token)

        assert athletes.effort_cache is segments.effort_cache
        assert segments.effort_cache is efforts.effort_cache
        assert efforts.effort_cache is activities.effort_cache
        assert athletes.effort_cache is ResourceCache.for_token(token, SegmentEffort)

    def test_concurrent_instance_returns_one_facade(self, token):
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(SegmentService.instance(token))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(r is results[0] for r in results)

    def test_facade_registered_on_token(self, token):
        service = ActivityService.instance(token)
        assert token.registered(StravaService) == [service]


class TestGetEntity:
    def _service(self, token):
        service = AthleteService.instance(token)
        return service, service.athlete_cache

    def test_miss_fetches_and_caches(self, token):
        service, cache = self._service(token)
        fetch = Mock(return_value=Athlete(id=5, resource_state=ResourceState.DETAILED))

        athlete = service._get_entity(cache, 5, fetch)

        assert athlete.id == 5
        assert cache.get(5) is athlete
        fetch.assert_called_once()

    def test_hit_makes_no_call(self, token):
        service, cache = self._service(token)
        cached = Athlete(id=5, resource_state=ResourceState.SUMMARY)
        cache.put(cached)
        fetch = Mock()

        assert service._get_entity(cache, 5, fetch) is cached
        fetch.assert_not_called()

    def test_meta_entry_is_refetched(self, token):
        service, cache = self._service(token)
        cache.put(Athlete.meta(5))
        fetch = Mock(return_value=Athlete(id=5, resource_state=ResourceState.DETAILED))

        athlete = service._get_entity(cache, 5, fetch)

        assert athlete.resource_state is ResourceState.DETAILED
        assert cache.get(5) is athlete

    def test_not_found_returns_none(self, token):
        service, cache = self._service(token)
        fetch = Mock(side_effect=NotFoundError("Record Not Found", 404))

        assert service._get_entity(cache, 5, fetch) is None
        assert 5 not in cache

    def test_unauthorized_with_valid_token_returns_placeholder(self, token):
        service, cache = self._service(token)
        fetch = Mock(side_effect=UnauthorizedError("Forbidden", 403))

        athlete = service._get_entity(cache, 5, fetch)

        assert isinstance(athlete, Athlete)
        assert athlete.id == 5
        assert athlete.resource_state is ResourceState.META
        assert 5 not in cache

    def test_unauthorized_with_invalid_token_raises(self, invalid_token):
        service, cache = self._service(invalid_token)
        fetch = Mock(side_effect=UnauthorizedError("Authorization Error", 401))

        with pytest.raises(UnauthorizedError):
            service._get_entity(cache, 5, fetch)


class TestClearCache:
    def test_clears_owned_caches(self, token):
        service = SegmentService.instance(token)
        service.effort_cache.put(SegmentEffort(id=1))
        service.clear_cache()
        assert len(service.effort_cache) == 0


class TestRunAsync:
    def test_resolves_to_result(self):
        future = run_async(lambda a, b=0: a + b, 2, b=3)
        assert future.result(timeout=5) == 5

    def test_reraises_exception(self):
        def boom():
            raise NotFoundError("gone", 404)

        future = run_async(boom)
        with pytest.raises(NotFoundError):
            future.result(timeout=5)

    def test_runs_off_caller_thread(self):
        future = run_async(lambda: threading.current_thread().name)
        assert future.result(timeout=5).startswith("strava")
