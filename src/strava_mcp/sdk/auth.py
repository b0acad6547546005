"""
Strava access token.

The token is the session: every service facade and resource cache created
for it is registered on the token itself and lives as long as it does.
Acquiring a token (the OAuth code exchange) is not handled here.
"""

import json
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Strava access tokens are 40 hex characters
_ACCESS_TOKEN_RE = re.compile(r"^[0-9a-fA-F]{40}$")


class Token:
    """
    A Strava access token plus the capability registry it owns.

    Registry keys are service classes or cached entity types; values are
    created lazily by get_or_create() and never replaced.
    """

    def __init__(
        self,
        access_token: str,
        athlete_id: Optional[int] = None,
        token_type: str = "Bearer",
        scopes: Optional[List[str]] = None,
        expires_at: Optional[int] = None,
    ):
        self.access_token = access_token
        self.athlete_id = athlete_id
        self.token_type = token_type
        self.scopes = list(scopes or [])
        self.expires_at = expires_at

        self._registry: Dict[Any, Any] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Token(athlete_id={self.athlete_id}, expires_at={self.expires_at})"

    # ── Validity ─────────────────────────────────────────────────────────

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and time.time() >= self.expires_at

    def is_valid(self) -> bool:
        """Structural check: well-formed and not expired. No network call."""
        if not isinstance(self.access_token, str):
            return False
        if not _ACCESS_TOKEN_RE.match(self.access_token):
            return False
        return not self.is_expired

    # ── Capability registry ──────────────────────────────────────────────

    def get(self, key) -> Optional[Any]:
        """Return the instance registered under key, or None."""
        with self._lock:
            return self._registry.get(key)

    def get_or_create(self, key, factory: Callable[[], Any]) -> Any:
        """
        Return the instance registered under key, creating it if absent.

        Check and insert happen under one lock, so concurrent callers for the
        same key always receive the same instance. The lock is reentrant so a
        factory may register the caches its own instance needs.
        """
        with self._lock:
            instance = self._registry.get(key)
            if instance is None:
                instance = factory()
                self._registry[key] = instance
                logger.debug("Registered %s on %r", getattr(key, "__name__", key), self)
            return instance

    def registered(self, kind: type = object) -> List[Any]:
        """All registered instances of the given type."""
        with self._lock:
            return [v for v in self._registry.values() if isinstance(v, kind)]

    # ── Serialization ────────────────────────────────────────────────────

    def export_token(self) -> str:
        """Export the token as a JSON string (the registry is not exported)."""
        return json.dumps({
            "access_token": self.access_token,
            "token_type": self.token_type,
            "athlete_id": self.athlete_id,
            "scopes": self.scopes,
            "expires_at": self.expires_at,
        })

    @classmethod
    def load_token(cls, token_data: str) -> "Token":
        """Rebuild a token from export_token() output.

        A bare access token string is accepted too.

        Raises:
            ValueError: If the data has no access token
        """
        token_data = token_data.strip()
        if not token_data.startswith("{"):
            return cls(access_token=token_data)

        data = json.loads(token_data)
        if not data.get("access_token"):
            raise ValueError("Token data has no access_token")

        # Strava's token endpoint nests the athlete and uses "scope"
        athlete_id = data.get("athlete_id")
        if athlete_id is None and isinstance(data.get("athlete"), dict):
            athlete_id = data["athlete"].get("id")
        scopes = data.get("scopes")
        if scopes is None and data.get("scope"):
            scopes = data["scope"].split(",")

        return cls(
            access_token=data["access_token"],
            athlete_id=athlete_id,
            token_type=data.get("token_type", "Bearer"),
            scopes=scopes,
            expires_at=data.get("expires_at"),
        )
