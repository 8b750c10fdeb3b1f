"""Cookie Settings — keyword arguments for Response.set_cookie.

Invariants:
    - Both cookies are HttpOnly, SameSite=Lax, Path=/
    - oidc_state lives 5 minutes; jwt_token lives 1 year
"""

from foopoc.config import Settings

STATE_COOKIE = "oidc_state"
TOKEN_COOKIE = "jwt_token"
STATE_TTL_SECONDS = 5 * 60
TOKEN_TTL_SECONDS = 365 * 24 * 60 * 60


def _cookie_kwargs(settings: Settings, key: str, value: str, max_age: int) -> dict:
    return {
        "key": key,
        "value": value,
        "max_age": max_age,
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


def state_cookie_kwargs(settings: Settings, state: str) -> dict:
    return _cookie_kwargs(settings, STATE_COOKIE, state, STATE_TTL_SECONDS)


def clear_state_cookie_kwargs(settings: Settings) -> dict:
    return _cookie_kwargs(settings, STATE_COOKIE, "", 0)


def token_cookie_kwargs(settings: Settings, raw_token: str) -> dict:
    return _cookie_kwargs(settings, TOKEN_COOKIE, raw_token, TOKEN_TTL_SECONDS)
