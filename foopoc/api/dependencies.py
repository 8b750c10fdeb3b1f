"""FastAPI Dependencies — service wiring and the bearer-token access guard.

Invariants:
    - OidcProvider and the outbound httpx client live on app.state, set once by
      the lifespan handler; nothing here builds them
    - require_claims verifies the assertion on every call; results are not cached
    - A protected route body never runs unless require_claims returned

Design Decisions:
    - Guard as a router-level dependency: it resolves before the route's own
      dependencies, so a rejected request never opens a database session
"""

import logging

import httpx
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from foopoc.core.domain_types import Claims
from foopoc.core.errors import BadRequestError, DiscoveryError, FooPocError
from foopoc.core.repository_protocols import FooRepository
from foopoc.infrastructure.database import get_db
from foopoc.infrastructure.oidc import OidcProvider
from foopoc.repositories.foo_repository import SqlFooRepository
from foopoc.services.authc_service import AuthcService
from foopoc.services.foo_service import FooService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_foo_repository(db: AsyncSession = Depends(get_db)) -> FooRepository:
    return SqlFooRepository(db)


def get_foo_service(
    repo: FooRepository = Depends(get_foo_repository),
) -> FooService:
    return FooService(repo)


def get_oidc_provider(request: Request) -> OidcProvider:
    provider = getattr(request.app.state, "oidc_provider", None)
    if provider is None:
        raise DiscoveryError("OIDC provider not initialized", "P0INIT")
    return provider


def get_http_client(request: Request) -> httpx.AsyncClient:
    http = getattr(request.app.state, "http_client", None)
    if http is None:
        raise DiscoveryError("HTTP client not initialized", "P1INIT")
    return http


def get_authc_service(
    provider: OidcProvider = Depends(get_oidc_provider),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> AuthcService:
    return AuthcService(provider, http)


def require_claims(
    request: Request,
    authorization: str | None = Header(default=None),
    provider: OidcProvider = Depends(get_oidc_provider),
) -> Claims:
    """Access guard: verify `Authorization: Bearer <id token>`.

    Missing or malformed header -> BadRequestError (400).
    Failed verification -> VerificationError (401).
    Malformed display claims -> ClaimsError (500).
    On success the claims are stored on request.state.claims.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise BadRequestError("Getting authorization header.", "G1AH3B")
    raw_token = authorization[len(BEARER_PREFIX):].strip()
    if not raw_token:
        raise BadRequestError("Getting authorization header.", "G1AH3B")

    try:
        payload = provider.verify(raw_token)
    except FooPocError as exc:
        raise exc.annotate("G2VF4T", "Verifying token.")

    try:
        claims = Claims.from_payload(payload)
    except FooPocError as exc:
        raise exc.annotate("G3CL8P", "Parsing claims.")

    request.state.claims = claims
    return claims
