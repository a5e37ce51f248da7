from __future__ import annotations

from typing import Any

import jwt

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.domain.value_objects.ids import IDENTIFIER_RE


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Map a decoded token to the acting user.

    The identity provider's ``sub`` claim is the marketplace user id. It ends up
    inside conversation keys, so it must satisfy the same identifier rules as
    any other id.
    """
    subject = payload.get("sub")
    if not subject:
        raise jwt.InvalidTokenError("Token has no subject")
    subject = str(subject)
    if not IDENTIFIER_RE.fullmatch(subject):
        raise jwt.InvalidTokenError("Token subject is not a valid user id")
    return Principal(user_id=subject)
