from __future__ import annotations

import asyncio

import jwt
from jwt import PyJWKClient

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.infrastructure.auth.claims import principal_from_claims

_ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class JWKSVerifier:
    """Verify tokens against the identity provider's published key set."""

    def __init__(self, jwks_url: str, audience: str | None = None) -> None:
        # PyJWKClient caches keys; only a cache miss goes to the network.
        self._jwk_client = PyJWKClient(jwks_url, cache_keys=True)
        self._audience = audience

    async def verify(self, token: str) -> Principal:
        # The key fetch is blocking urllib; keep it off the event loop.
        signing_key = await asyncio.to_thread(self._jwk_client.get_signing_key_from_jwt, token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=_ASYMMETRIC_ALGORITHMS,
            audience=self._audience,
            options={"verify_aud": self._audience is not None},
        )
        return principal_from_claims(payload)
