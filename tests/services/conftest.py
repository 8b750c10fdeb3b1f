"""Service test fixtures — async DB, a local OIDC provider and a FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - app.state carries an OidcProvider backed by a locally generated RSA key
    - The provider's token endpoint is an httpx.MockTransport; calls are recorded

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - One RSA key per test session: key generation is the slowest step here
"""

import dataclasses
import time
from urllib.parse import parse_qs

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from foopoc.db.base import Base
from foopoc.infrastructure.database import get_db
from foopoc.infrastructure.oidc import OidcProvider
from foopoc.main import app
import foopoc.models  # noqa: F401

ISSUER = "https://idp.test"
CLIENT_ID = "test-client-id"
KID = "test-key-1"
TOKEN_ENDPOINT = "https://idp.test/token"


def _jwk(private_key, kid: str) -> dict:
    jwk = jwt.algorithms.RSAAlgorithm.to_jwk(
        private_key.public_key(), as_dict=True,
    )
    jwk.update({"kid": kid, "alg": "RS256", "use": "sig"})
    return jwk


@pytest.fixture(scope="session")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def foreign_key():
    """A key the provider never published."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def jwks_dict(signing_key):
    return {"keys": [_jwk(signing_key, KID)]}


@pytest.fixture
def oidc_provider(jwks_dict):
    return OidcProvider(
        issuer=ISSUER,
        authorization_endpoint="https://idp.test/authorize",
        token_endpoint=TOKEN_ENDPOINT,
        jwks=jwt.PyJWKSet.from_dict(jwks_dict),
        client_id=CLIENT_ID,
        client_secret="test-client-secret",
        redirect_uri="http://test/callback",
    )


@pytest.fixture
def mint_token(signing_key):
    """Build a signed ID token; keyword arguments override payload claims."""
    def _mint(key=None, kid=KID, algorithm="RS256", **overrides) -> str:
        now = int(time.time())
        payload = {
            "iss": ISSUER,
            "aud": CLIENT_ID,
            "sub": "user-1",
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "iat": now,
            "exp": now + 600,
        }
        payload.update(overrides)
        payload = {k: v for k, v in payload.items() if v is not None}
        headers = {"kid": kid} if kid else {}
        return jwt.encode(
            payload, key or signing_key, algorithm=algorithm, headers=headers,
        )
    return _mint


@pytest.fixture
def token_endpoint():
    """Controllable fake token endpoint.

    Returns dict with:
      - calls: list of decoded form bodies posted to the endpoint
      - response: httpx.Response (or callable) returned for each call
    """
    state = {"calls": [], "response": httpx.Response(500)}

    def handler(request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode())
        state["calls"].append({k: v[0] for k, v in form.items()})
        r = state["response"]
        return r(request) if callable(r) else r

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
async def http_client(token_endpoint):
    async with httpx.AsyncClient(transport=token_endpoint["transport"]) as c:
        yield c


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory, oidc_provider, http_client):
    """FastAPI test client with DB dependency and provider state overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.oidc_provider = oidc_provider
    app.state.http_client = http_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.oidc_provider
    del app.state.http_client


@pytest.fixture
def auth_headers(mint_token):
    return {"Authorization": f"Bearer {mint_token()}"}


@pytest.fixture
def mixed_alg_provider(oidc_provider):
    """Provider advertising HS256 and ES256 next to RS256, with only an RSA key."""
    return dataclasses.replace(
        oidc_provider, algorithms=("RS256", "HS256", "ES256"),
    )


@pytest.fixture
def wrong_type_tokens(mint_token, ec_key):
    """Tokens whose header alg is advertised but does not fit the RSA key."""
    return {
        "HS256": mint_token(key="x" * 32, algorithm="HS256"),
        "ES256": mint_token(key=ec_key, algorithm="ES256"),
    }
