from __future__ import annotations

import jwt

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.infrastructure.auth.claims import principal_from_claims


class HS256Verifier:
    """Verify tokens signed with the secret shared with the marketplace auth service."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: str | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience

    async def verify(self, token: str) -> Principal:
        payload = jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            audience=self._audience,
            options={"verify_aud": self._audience is not None},
        )
        return principal_from_claims(payload)
