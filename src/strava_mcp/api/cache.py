"""
Per-token resource caches.

One ResourceCache per (token, entity type), registered on the token.
Stores the most recently seen snapshot of each entity by id. There is no
eviction, TTL or size bound: a cache lives as long as its token and is
only ever cleared wholesale.
"""

import logging
from threading import Lock
from typing import Dict, Generic, Iterable, Optional, Type, TypeVar

from strava_mcp.api.model import Entity
from strava_mcp.sdk.auth import Token

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class ResourceCache(Generic[E]):
    """Thread-safe id -> entity map for one entity type."""

    def __init__(self, entity_type: Type[E]):
        self._mu = Lock()
        self._entity_type = entity_type
        self._data: Dict[int, E] = {}

    @classmethod
    def for_token(cls, token: Token, entity_type: Type[E]) -> "ResourceCache[E]":
        """The token's cache for entity_type, created on first use."""
        return token.get_or_create((cls, entity_type), lambda: cls(entity_type))

    @property
    def entity_type(self) -> Type[E]:
        return self._entity_type

    def get(self, entity_id: int) -> Optional[E]:
        """Return the stored entity, META placeholders included."""
        with self._mu:
            entity = self._data.get(entity_id)
        logger.debug(
            "%s cache %s for id=%s",
            self._entity_type.__name__, "hit" if entity is not None else "miss", entity_id,
        )
        return entity

    def put(self, entity: E) -> None:
        """Insert or overwrite by id, whatever the stored entity's resource state.

        Raises:
            TypeError: If entity is not of this cache's type
            ValueError: If entity has no id
        """
        if not isinstance(entity, self._entity_type):
            raise TypeError(
                f"{self._entity_type.__name__} cache cannot store {type(entity).__name__}"
            )
        if entity.id is None:
            raise ValueError(f"Cannot cache a {self._entity_type.__name__} without an id")
        with self._mu:
            self._data[entity.id] = entity

    def put_all(self, entities: Iterable[E]) -> None:
        for entity in entities:
            self.put(entity)

    def remove_all(self) -> None:
        with self._mu:
            count = len(self._data)
            self._data.clear()
        logger.debug("Cleared %d %s entries", count, self._entity_type.__name__)

    def __len__(self) -> int:
        with self._mu:
            return len(self._data)

    def __contains__(self, entity_id: int) -> bool:
        with self._mu:
            return entity_id in self._data
