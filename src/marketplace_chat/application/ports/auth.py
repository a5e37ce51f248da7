from __future__ import annotations

from typing import Protocol

from marketplace_chat.application.dto.principal import Principal


class TokenVerifier(Protocol):
    """Turns a bearer token into the acting user; raises ``jwt.PyJWTError`` when it cannot."""

    async def verify(self, token: str) -> Principal: ...
