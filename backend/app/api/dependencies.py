"""Request Context Dependencies — provider, caller identity and session preference.

Invariants:
    - get_provider returns the process-wide provider from app.state (never constructs one);
      before the lifespan has stored one it raises ProviderUnavailableError (503)
    - get_current_user always yields a User (configured local user when headers are absent)
    - get_preference returns the same Preference object for the same session cookie
      while that session is among the MAX_PREFERENCE_SESSIONS most recently seen
    - _preferences never holds more than MAX_PREFERENCE_SESSIONS entries

Design Decisions:
    - FastAPI Depends over globals in handlers: tests swap the provider with
      app.dependency_overrides
    - _preferences as module-level LRU: deliberate exception to no-global-state rule
      (ADR: single-process uvicorn, preferences are UI hints, losing them on restart
      or eviction is fine). Cookie values are client-chosen, so the map is capped.
"""

import logging
from collections import OrderedDict

from fastapi import Request

from app.config import get_settings
from app.core.errors import ErrorContext, ProviderUnavailableError
from app.core.provider_protocol import Provider
from app.schemas.identity import Preference, User

logger = logging.getLogger(__name__)

SESSION_COOKIE = "meshery-session"
MAX_PREFERENCE_SESSIONS = 1024

_preferences: OrderedDict[str, Preference] = OrderedDict()


def get_provider(request: Request) -> Provider:
    """FastAPI dependency for the configured provider."""
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        raise ProviderUnavailableError(ErrorContext(operation=request.url.path))
    return provider


def get_current_user(request: Request) -> User:
    settings = get_settings()
    user_id = request.headers.get("x-user-id") or settings.local_user_id
    username = request.headers.get("x-user-name") or settings.local_username
    return User(user_id=user_id, username=username, provider=settings.provider)


def get_preference(request: Request) -> Preference:
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        return Preference()
    pref = _preferences.get(session_id)
    if pref is not None:
        _preferences.move_to_end(session_id)
        return pref
    pref = _preferences[session_id] = Preference(session_id=session_id)
    while len(_preferences) > MAX_PREFERENCE_SESSIONS:
        _preferences.popitem(last=False)
    return pref
