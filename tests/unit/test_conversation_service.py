from __future__ import annotations

import pytest

from marketplace_chat.application.exceptions import NotFoundError, ValidationError
from marketplace_chat.services import conversation_service
from tests.conftest import make_listing


@pytest.mark.asyncio
async def test_resolve_is_the_same_for_both_participants(u1, u2, uow):
    from_buyer = await conversation_service.resolve_conversation(u1, "U2", "R7", uow)
    from_seller = await conversation_service.resolve_conversation(u2, "U1", "R7", uow)

    assert from_buyer == from_seller == "U1_U2_R7"


@pytest.mark.asyncio
async def test_resolve_persists_nothing(u1, uow):
    await conversation_service.resolve_conversation(u1, "U2", "R7", uow)

    assert uow.messages._messages == []
    assert uow.commits == 0


@pytest.mark.asyncio
async def test_resolve_unknown_listing(u1, uow):
    with pytest.raises(NotFoundError):
        await conversation_service.resolve_conversation(u1, "U2", "R404", uow)


@pytest.mark.asyncio
async def test_resolve_with_self(u2, uow):
    with pytest.raises(ValidationError):
        await conversation_service.resolve_conversation(u2, "U2", "R7", uow)


@pytest.mark.asyncio
async def test_resolve_malformed_listing_id(u1, uow):
    with pytest.raises(ValidationError):
        await conversation_service.resolve_conversation(u1, "U2", "R_7", uow)


@pytest.mark.asyncio
async def test_resolve_deactivated_listing(u1, uow):
    uow.add_listing(make_listing("R9", owner_id="U2", is_active=False))

    with pytest.raises(NotFoundError):
        await conversation_service.resolve_conversation(u1, "U2", "R9", uow)
