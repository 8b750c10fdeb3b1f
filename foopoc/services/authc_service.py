"""Authentication Service — anti-forgery state and the authorization-code flow.

Invariants:
    - State is 32 random bytes, unpadded URL-safe base64, never reused
    - process_oauth either returns verified claims with the raw ID token or
      raises; there is no partial success
"""

import base64
import logging
import secrets

import httpx

from foopoc.core.domain_types import Claims
from foopoc.core.errors import FooPocError, MissingAssertionError, StateError
from foopoc.infrastructure.oidc import OidcProvider, exchange_code

logger = logging.getLogger(__name__)

STATE_BYTES = 32


def random_token(nbytes: int = STATE_BYTES) -> str:
    raw = secrets.token_bytes(nbytes)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


class AuthcService:

    def __init__(self, provider: OidcProvider, http: httpx.AsyncClient):
        self._provider = provider
        self._http = http

    def generate_state(self) -> str:
        try:
            return random_token()
        except (OSError, NotImplementedError) as e:
            raise StateError("Generating state for oidc", "A1ST6G") from e

    def authorization_url(self, state: str) -> str:
        return self._provider.authorization_url(state)

    def verify_assertion(self, raw_token: str) -> Claims:
        """Verify a raw ID token and decode its display claims."""
        payload = self._provider.verify(raw_token)
        return Claims.from_payload(payload)

    async def process_oauth(self, code: str) -> tuple[Claims, str]:
        """Exchange a code, verify the embedded ID token, extract claims."""
        try:
            token = await exchange_code(self._provider, self._http, code)
        except FooPocError as exc:
            raise exc.annotate("A2XC3H", "Exchanging the code for a token.")

        raw_id_token = token.get("id_token")
        if not isinstance(raw_id_token, str) or not raw_id_token:
            raise MissingAssertionError("A3JW7T")

        try:
            claims = self.verify_assertion(raw_id_token)
        except FooPocError as exc:
            raise exc.annotate("A4VF2J", "Verifying the id token.")

        logger.info("OIDC login completed")
        return claims, raw_id_token
