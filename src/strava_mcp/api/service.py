"""
Service facade base and the async wrapper.

A facade is obtained with `SomeService.instance(token)`: one instance per
token per service class, registered on the token. Facades share the token's
per-entity-type caches, so an effort cached by one facade is visible to
every other facade holding the same token.
"""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, List, Optional, Type, TypeVar

from strava_mcp.api.cache import ResourceCache
from strava_mcp.api.model import Entity
from strava_mcp.api.paging import Paging, fetch_page
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.client import StravaClient
from strava_mcp.sdk.errors import NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Entity)
S = TypeVar("S", bound="StravaService")

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            max_workers = os.environ.get("STRAVA_MAX_WORKERS")
            _executor = ThreadPoolExecutor(
                max_workers=int(max_workers) if max_workers else None,
                thread_name_prefix="strava",
            )
        return _executor


def run_async(fn: Callable[..., T], *args, **kwargs) -> "Future[T]":
    """
    Run fn(*args, **kwargs) on the shared worker pool.

    Submission never blocks. The returned future resolves to fn's result or
    re-raises its exception from result(). Two submissions run in no
    particular order; cancel() only works before the call has started.
    """
    return _get_executor().submit(fn, *args, **kwargs)


class StravaService:
    """Base class for per-resource facades."""

    def __init__(self, token: Token, client: StravaClient = None):
        self.token = token
        self.client = client or StravaClient(token.access_token)
        self._owned_caches: List[ResourceCache] = []

    @classmethod
    def instance(cls: Type[S], token: Token) -> S:
        """The facade of this class for token, created on first request."""
        return token.get_or_create(cls, lambda: cls(token))

    def clear_cache(self) -> None:
        """Drop every cached entity this facade manages."""
        for cache in self._owned_caches:
            cache.remove_all()

    def _cache(self, entity_type: Type[E]) -> ResourceCache[E]:
        cache = ResourceCache.for_token(self.token, entity_type)
        self._owned_caches.append(cache)
        return cache

    # ── Shared fetch policies ────────────────────────────────────────────

    def _get_entity(
        self, cache: ResourceCache[E], entity_id: int, fetch: Callable[[], E],
    ) -> Optional[E]:
        """
        Cached get-by-id.

        A cached entity is a hit unless it is a META placeholder. Misses go
        to Strava: 404 gives None, 401/403 with a still-valid token gives a
        META placeholder, anything else propagates. Fetched entities are
        written back to the cache; placeholders are not.
        """
        entity = cache.get(entity_id)
        if entity is not None and not entity.is_meta:
            return entity

        try:
            entity = fetch()
        except NotFoundError:
            logger.debug("%s %s not found", cache.entity_type.__name__, entity_id)
            return None
        except UnauthorizedError:
            if self.token.is_valid():
                logger.warning(
                    "Not authorised to view %s %s; returning placeholder",
                    cache.entity_type.__name__, entity_id,
                )
                return cache.entity_type.meta(entity_id)
            raise

        cache.put(entity)
        return entity

    def _fetch(
        self, fetch: Callable[[], T], placeholder: Callable[[], T] = None,
    ) -> Optional[T]:
        """Uncached single-object fetch with the same error downgrades as _get_entity."""
        try:
            return fetch()
        except NotFoundError:
            logger.debug("Strava returned 404; treating as absent")
            return None
        except UnauthorizedError:
            if placeholder is not None and self.token.is_valid():
                logger.warning("Not authorised to view resource; returning placeholder")
                return placeholder()
            raise

    def _list(
        self,
        cache: ResourceCache[E],
        paging: Optional[Paging],
        page_fn: Callable[[Paging], List[E]],
    ) -> List[E]:
        """One page from Strava (never from cache), written through to the cache."""
        entities = fetch_page(paging, page_fn)
        cache.put_all(entities)
        return entities
