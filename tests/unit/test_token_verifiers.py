from __future__ import annotations

import jwt
import pytest

from marketplace_chat.infrastructure.auth.hs256_verifier import HS256Verifier

SECRET = "unit-test-secret-with-at-least-32-bytes"


def _token(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.mark.asyncio
async def test_subject_becomes_principal():
    principal = await HS256Verifier(SECRET).verify(_token({"sub": "U1"}))
    assert principal.user_id == "U1"


@pytest.mark.asyncio
async def test_numeric_subject_is_stringified():
    principal = await HS256Verifier(SECRET).verify(_token({"sub": "42"}))
    assert principal.user_id == "42"


@pytest.mark.asyncio
@pytest.mark.parametrize("claims", [{}, {"sub": ""}, {"sub": "U1_U2"}, {"sub": "x" * 65}])
async def test_unusable_subject_is_rejected(claims):
    with pytest.raises(jwt.InvalidTokenError):
        await HS256Verifier(SECRET).verify(_token(claims))


@pytest.mark.asyncio
async def test_wrong_secret_is_rejected():
    with pytest.raises(jwt.InvalidSignatureError):
        await HS256Verifier(SECRET).verify(_token({"sub": "U1"}, secret="another-secret-that-is-32-bytes-long"))


@pytest.mark.asyncio
async def test_audience_is_checked_when_configured():
    verifier = HS256Verifier(SECRET, audience="marketplace-chat")

    assert (await verifier.verify(_token({"sub": "U1", "aud": "marketplace-chat"}))).user_id == "U1"
    with pytest.raises(jwt.InvalidAudienceError):
        await verifier.verify(_token({"sub": "U1", "aud": "billing"}))
    with pytest.raises(jwt.MissingRequiredClaimError):
        await verifier.verify(_token({"sub": "U1"}))


@pytest.mark.asyncio
async def test_audience_ignored_when_not_configured():
    principal = await HS256Verifier(SECRET).verify(_token({"sub": "U1", "aud": "billing"}))
    assert principal.user_id == "U1"
