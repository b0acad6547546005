"""
Token factory for the Strava MCP server.

Maps MCP sessions to Strava Tokens.

Session Persistence:
- FastMCP Context state doesn't persist across HTTP requests, so token JSON
  is also written to STRAVA_SESSION_DIR/{session_id}.json
- Token objects own their service facades and caches, so the same access
  token must resolve to the same Token object on every request. Live
  tokens are kept in-process, keyed by access token. Expired tokens are
  dropped, and at most STRAVA_MAX_LIVE_TOKENS are kept, least recently
  used evicted first.
"""

import json
import logging
import os
from collections import OrderedDict
from pathlib import Path
from threading import Lock
from typing import Optional

from fastmcp import Context

from strava_mcp.api.service import StravaService
from strava_mcp.sdk.auth import Token
from strava_mcp.sdk.errors import UnauthorizedError

logger = logging.getLogger(__name__)

STRAVA_TOKENS_KEY = "strava_tokens"
SESSION_STORE_DIR = Path(os.environ.get("STRAVA_SESSION_DIR", "/data/strava_sessions"))

MAX_LIVE_TOKENS = int(os.environ.get("STRAVA_MAX_LIVE_TOKENS", "256"))

_live_tokens: "OrderedDict[str, Token]" = OrderedDict()
_live_tokens_lock = Lock()


def _prune_live_tokens() -> None:
    """Drop expired tokens, then the least recently used beyond MAX_LIVE_TOKENS. Caller holds the lock."""
    for access_token in [k for k, t in _live_tokens.items() if t.is_expired]:
        del _live_tokens[access_token]
    while len(_live_tokens) > MAX_LIVE_TOKENS:
        _, evicted = _live_tokens.popitem(last=False)
        logger.debug("Evicted live token for athlete %s", evicted.athlete_id)


def token_from_data(tokens: str) -> Token:
    """
    Resolve serialized token data to the live Token for that access token.

    Args:
        tokens: JSON from Token.export_token(), Strava's token response, or a bare access token

    Returns:
        The Token already in use for this access token, or a newly registered one
    """
    loaded = Token.load_token(tokens)
    with _live_tokens_lock:
        token = _live_tokens.get(loaded.access_token)
        if token is None:
            _live_tokens[loaded.access_token] = loaded
            _prune_live_tokens()
            return loaded
        _live_tokens.move_to_end(loaded.access_token)
        _prune_live_tokens()
    if token.athlete_id is None and loaded.athlete_id is not None:
        token.athlete_id = loaded.athlete_id
    return token


def release_token(token: Token) -> None:
    """Clear every cache the token's facades hold and forget the live token."""
    for service in token.registered(StravaService):
        service.clear_cache()
    with _live_tokens_lock:
        if _live_tokens.get(token.access_token) is token:
            del _live_tokens[token.access_token]


def _get_session_file_path(session_id: str) -> Path:
    SESSION_STORE_DIR.mkdir(parents=True, exist_ok=True)
    # Sanitize session_id to prevent path traversal
    safe_session_id = "".join(c for c in session_id if c.isalnum() or c in "-_")
    return SESSION_STORE_DIR / f"{safe_session_id}.json"


def _load_session_data(session_id: str) -> dict:
    session_file = _get_session_file_path(session_id)
    if not session_file.exists():
        return {}
    try:
        with open(session_file, "r") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable session file %s: %s", session_file, e)
        return {}


def _save_session_data(session_id: str, data: dict) -> None:
    session_file = _get_session_file_path(session_id)
    try:
        with open(session_file, "w") as f:
            json.dump(data, f)
    except OSError as e:
        # Session won't persist but the current call still works
        logger.warning("Failed to save session data: %s", e)


def _get_session_tokens(ctx: Context) -> Optional[str]:
    """Token data from Context state, falling back to the file store."""
    tokens = ctx.get_state(STRAVA_TOKENS_KEY)
    if tokens:
        return tokens

    try:
        session_id = ctx.session_id
    except RuntimeError:
        # Not in a request context
        return None

    tokens = _load_session_data(session_id).get(STRAVA_TOKENS_KEY)
    if tokens:
        ctx.set_state(STRAVA_TOKENS_KEY, tokens)
    return tokens


def get_token(ctx: Context) -> Token:
    """
    Get the Strava Token for this MCP session.

    Usage in tools:
        @app.tool()
        async def get_athlete(athlete_id: int, ctx: Context) -> str:
            service = AthleteService.instance(get_token(ctx))
            ...

    Raises:
        ValueError: If no Strava session is active
    """
    tokens = _get_session_tokens(ctx)
    if not tokens:
        raise ValueError("No Strava session. Call set_strava_session() first.")
    return token_from_data(tokens)


def set_session_tokens(ctx: Context, tokens: str) -> Token:
    """
    Store token data for this session, in memory and on disk.

    Returns:
        The live Token

    Raises:
        ValueError: If the data holds no access token
    """
    token = token_from_data(tokens)
    tokens = token.export_token()

    ctx.set_state(STRAVA_TOKENS_KEY, tokens)
    try:
        session_id = ctx.session_id
    except RuntimeError:
        # No session id outside a request; context state only
        return token

    session_data = _load_session_data(session_id)
    session_data[STRAVA_TOKENS_KEY] = tokens
    _save_session_data(session_id, session_data)
    return token


def clear_session_tokens(ctx: Context) -> None:
    """Forget this session's token, drop its caches, and delete the session file."""
    tokens = _get_session_tokens(ctx)
    if tokens:
        release_token(token_from_data(tokens))

    ctx.set_state(STRAVA_TOKENS_KEY, None)
    try:
        session_file = _get_session_file_path(ctx.session_id)
    except RuntimeError:
        return
    if session_file.exists():
        session_file.unlink()


def is_token_expired_error(error: Exception, token: Token = None) -> bool:
    """
    True if Strava rejected the access token itself, rather than access to one resource.

    Strava reports a bad token as a 401 with an error on the access_token field.
    A token that is structurally invalid or past expires_at counts as expired too.
    """
    if not isinstance(error, UnauthorizedError):
        return False
    if token is not None and not token.is_valid():
        return True
    return any(e.get("field") == "access_token" for e in error.errors if isinstance(e, dict))


def handle_token_expired(ctx: Context) -> str:
    """Clear the session after a token failure and return the error payload."""
    try:
        clear_session_tokens(ctx)
    except (OSError, ValueError) as e:
        logger.warning("Failed to clear expired session: %s", e)

    return json.dumps({
        "error": "Your Strava session has expired. Please provide a new access token.",
        "error_code": "SESSION_EXPIRED",
        "note": "Strava access tokens expire after six hours and must be refreshed through OAuth.",
    }, indent=2)
