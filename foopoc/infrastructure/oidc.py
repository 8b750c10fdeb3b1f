"""OpenID Connect Provider — discovery, code exchange and ID token verification.

Invariants:
    - OidcProvider is immutable and built once at startup by discover_provider()
    - Signing keys are fetched once with the discovery document; there is no
      background refresh, so a provider key rotation needs a process restart
    - verify() checks signature, issuer, audience (= client id), exp and iat
    - The header alg must be one the provider advertises and must fit the
      signing key type; anything else is a VerificationError, never a crash
    - Error messages raised here are for logs; the API layer renders a generic view

Design Decisions:
    - PyJWT PyJWKSet holds the provider keys; keys are matched by kid, and every
      key is tried when the token header carries no kid
    - Outbound calls go through a caller-owned httpx.AsyncClient so tests can
      mount an httpx.MockTransport in place of the provider
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import httpx
import jwt

from foopoc.core.errors import (
    DiscoveryError, ExchangeError, VerificationError,
)

logger = logging.getLogger(__name__)

DISCOVERY_SUFFIX = "/.well-known/openid-configuration"
DEFAULT_SCOPES = ("openid", "email", "profile")
REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud"]

# JWS algorithm family prefix -> JWK key type
_KEY_TYPES = {"RS": "RSA", "PS": "RSA", "ES": "EC", "HS": "oct", "Ed": "OKP"}


def _key_fits(key: jwt.PyJWK, alg: str) -> bool:
    return key.key_type == _KEY_TYPES.get(alg[:2])


@dataclass(frozen=True)
class OidcProvider:
    """Provider endpoints, signing keys and client registration."""
    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    jwks: jwt.PyJWKSet = field(repr=False)
    client_id: str
    client_secret: str = field(repr=False)
    redirect_uri: str
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    algorithms: tuple[str, ...] = ("RS256",)

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
        }
        sep = "&" if "?" in self.authorization_endpoint else "?"
        return f"{self.authorization_endpoint}{sep}{urlencode(params)}"

    def verify(self, raw_token: str) -> dict[str, Any]:
        """Verify an ID token and return its payload. Raises VerificationError."""
        try:
            header = jwt.get_unverified_header(raw_token)
        except jwt.PyJWTError as e:
            raise VerificationError("Malformed assertion header", "V1HD3R") from e

        alg = header.get("alg")
        if not isinstance(alg, str) or alg not in self.algorithms:
            raise VerificationError(
                f"Assertion algorithm {alg!r} not allowed", "V5AL3G",
            )

        kid = header.get("kid")
        candidates = [
            k for k in self.jwks.keys if not kid or k.key_id == kid
        ]
        if not candidates:
            raise VerificationError(f"Unknown signing key {kid!r}", "V2KD7S")
        candidates = [k for k in candidates if _key_fits(k, alg)]
        if not candidates:
            raise VerificationError(
                f"No signing key of the right type for {alg}", "V6KT4A",
            )

        bad_signature: jwt.InvalidSignatureError | None = None
        for signing_key in candidates:
            try:
                return jwt.decode(
                    raw_token,
                    key=signing_key.key,
                    algorithms=[alg],
                    audience=self.client_id,
                    issuer=self.issuer,
                    options={"require": REQUIRED_CLAIMS},
                )
            except jwt.InvalidSignatureError as e:
                bad_signature = e
            except (jwt.PyJWTError, TypeError, ValueError) as e:
                raise VerificationError(
                    f"Assertion rejected: {e}", "V3CL8M",
                ) from e
        raise VerificationError(
            "Assertion signature did not verify", "V4SG2N",
        ) from bad_signature


def discovery_url(provider_url: str) -> str:
    """Accept either an issuer URL or the full discovery document URL."""
    url = provider_url.rstrip("/")
    if url.endswith(DISCOVERY_SUFFIX):
        return url
    return url + DISCOVERY_SUFFIX


async def _get_json(http: httpx.AsyncClient, url: str, what: str) -> dict:
    try:
        r = await http.get(url)
        r.raise_for_status()
        data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        raise DiscoveryError(f"Fetching {what} from {url}", "D1FT5H") from e
    if not isinstance(data, dict):
        raise DiscoveryError(f"Invalid {what} document", "D2DC4V")
    return data


async def discover_provider(
    http: httpx.AsyncClient,
    *,
    provider_url: str,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    scopes: tuple[str, ...] = DEFAULT_SCOPES,
) -> OidcProvider:
    """Load the discovery document and signing keys; build the provider."""
    doc = await _get_json(http, discovery_url(provider_url), "discovery")

    issuer = str(doc.get("issuer") or "")
    authorization_endpoint = str(doc.get("authorization_endpoint") or "")
    token_endpoint = str(doc.get("token_endpoint") or "")
    jwks_uri = str(doc.get("jwks_uri") or "")
    missing = [
        name for name, value in (
            ("issuer", issuer),
            ("authorization_endpoint", authorization_endpoint),
            ("token_endpoint", token_endpoint),
            ("jwks_uri", jwks_uri),
        ) if not value
    ]
    if missing:
        raise DiscoveryError(
            f"Discovery document missing {', '.join(missing)}", "D3MS6G",
        )

    # An issuer URL must match the issuer the provider reports.
    base = provider_url.rstrip("/")
    if not base.endswith(DISCOVERY_SUFFIX) and issuer.rstrip("/") != base:
        raise DiscoveryError(
            f"Issuer mismatch: expected {base}, got {issuer}", "D4IS1M",
        )

    jwks_doc = await _get_json(http, jwks_uri, "JWKS")
    try:
        jwks = jwt.PyJWKSet.from_dict(jwks_doc)
    except jwt.PyJWTError as e:
        raise DiscoveryError("Provider JWKS has no usable keys", "D5JW8K") from e

    advertised = doc.get("id_token_signing_alg_values_supported") or ["RS256"]
    algorithms = tuple(a for a in advertised if a and a != "none") or ("RS256",)

    logger.info(
        f"OIDC provider discovered: issuer={issuer} keys={len(jwks.keys)}",
    )
    return OidcProvider(
        issuer=issuer,
        authorization_endpoint=authorization_endpoint,
        token_endpoint=token_endpoint,
        jwks=jwks,
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        scopes=scopes,
        algorithms=algorithms,
    )


async def exchange_code(
    provider: OidcProvider, http: httpx.AsyncClient, code: str,
) -> dict[str, Any]:
    """Exchange an authorization code for the provider's token response."""
    payload = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": provider.redirect_uri,
        "client_id": provider.client_id,
        "client_secret": provider.client_secret,
    }
    try:
        r = await http.post(
            provider.token_endpoint,
            data=payload,
            headers={"Accept": "application/json"},
        )
    except httpx.HTTPError as e:
        raise ExchangeError("Calling token endpoint", "X1TK7E") from e
    if r.status_code >= 400:
        # Status only; the body may echo client credentials.
        raise ExchangeError(
            f"Token endpoint returned status {r.status_code}", "X2ST3S",
        )
    try:
        data = r.json()
    except ValueError as e:
        raise ExchangeError("Token response is not JSON", "X3JS9N") from e
    if not isinstance(data, dict):
        raise ExchangeError("Token response is not an object", "X4OB2J")
    return data
