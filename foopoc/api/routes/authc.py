"""Authentication Routes — home page, OIDC login redirect and callback.

Invariants:
    - These routes are unguarded and always answer with HTML or a redirect
    - /callback never calls the token endpoint unless the query state equals the
      oidc_state cookie byte-for-byte and a code is present
    - Any failure after that renders the generic error view (200); details are logged
"""

import hmac
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from foopoc.api.cookies import (
    STATE_COOKIE, clear_state_cookie_kwargs, state_cookie_kwargs,
    token_cookie_kwargs,
)
from foopoc.api.dependencies import get_authc_service
from foopoc.api.views import render_home
from foopoc.config import Settings, get_settings
from foopoc.core.errors import FooPocError, format_tag
from foopoc.services.authc_service import AuthcService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["authc"])


def _log_failure(exc: FooPocError) -> None:
    logger.error(
        f"Login failed: {exc}",
        extra={"error_code": exc.code, "trail": exc.trail},
    )


def _states_match(expected: str, received: str) -> bool:
    if not expected or not received:
        return False
    return hmac.compare_digest(expected.encode(), received.encode())


@router.get("/")
async def home():
    return render_home()


@router.get("/login")
async def login(
    service: AuthcService = Depends(get_authc_service),
    settings: Settings = Depends(get_settings),
):
    try:
        state = service.generate_state()
    except FooPocError as exc:
        _log_failure(exc.annotate("L1LG5N", "Logging in."))
        return render_home(error=True)

    response = RedirectResponse(
        service.authorization_url(state), status_code=status.HTTP_302_FOUND,
    )
    response.set_cookie(**state_cookie_kwargs(settings, state))
    return response


@router.get("/callback")
async def callback(
    request: Request,
    state: str = "",
    code: str = "",
    service: AuthcService = Depends(get_authc_service),
    settings: Settings = Depends(get_settings),
):
    expected = request.cookies.get(STATE_COOKIE, "")
    if not _states_match(expected, state):
        logger.error(
            format_tag("L2CS7F", "Logging in. CSRF attempted. States do not match."),
            extra={"error_code": "L2CS7F"},
        )
        return render_home(error=True)

    if not code:
        logger.error(
            format_tag("L3CD2Q", "Getting oidc code from query string."),
            extra={"error_code": "L3CD2Q"},
        )
        return render_home(error=True)

    try:
        claims, raw_token = await service.process_oauth(code)
    except FooPocError as exc:
        _log_failure(exc.annotate("L4PO8A", "Processing OAuth."))
        return render_home(error=True)

    response = render_home(
        logged_in=True, name=claims.name, email=claims.email,
    )
    response.set_cookie(**token_cookie_kwargs(settings, raw_token))
    response.set_cookie(**clear_state_cookie_kwargs(settings))
    return response
