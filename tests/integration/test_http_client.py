"""HttpChatApi + ConversationSyncClient against the real app over an in-process transport."""
from __future__ import annotations

import asyncio

import httpx
import jwt
import pytest
import pytest_asyncio

from marketplace_chat.api.deps import get_uow
from marketplace_chat.app import create_app
from marketplace_chat.application.exceptions import ForbiddenError, NotFoundError, ValidationError
from marketplace_chat.client.api import HttpChatApi
from marketplace_chat.client.sync_client import ConversationSyncClient, SyncState
from marketplace_chat.config import settings
from tests.conftest import FakeUoW, make_listing


def _token(sub: str) -> str:
    return jwt.encode({"sub": sub}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest_asyncio.fixture
async def http():
    app = create_app()
    uow = FakeUoW()
    uow.add_listing(make_listing("R7", owner_id="U2"))

    async def _override():
        yield uow

    app.dependency_overrides[get_uow] = _override
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://chat.test") as client:
        yield client


@pytest.mark.asyncio
async def test_round_trip_between_buyer_and_seller(http):
    buyer = HttpChatApi(http, _token("U1"))
    seller = HttpChatApi(http, _token("U2"))

    conversation_id = await buyer.resolve_conversation("U2", "R7")
    await buyer.send_message(conversation_id, "Is this still available?")

    (summary,) = await seller.list_conversations()
    assert summary.conversation_id == conversation_id
    assert summary.unread_count == 1

    opened = await seller.open_conversation(conversation_id)
    assert [m.body for m in opened] == ["Is this still available?"]
    assert (await seller.list_conversations())[0].unread_count == 0


@pytest.mark.asyncio
async def test_error_statuses_map_to_app_errors(http):
    buyer = HttpChatApi(http, _token("U1"))
    stranger = HttpChatApi(http, _token("U9"))

    with pytest.raises(NotFoundError):
        await buyer.resolve_conversation("U2", "R404")
    with pytest.raises(ValidationError):
        await buyer.send_message("U1_U2_R7", "")
    with pytest.raises(ForbiddenError):
        await stranger.list_messages("U1_U2_R7")


@pytest.mark.asyncio
async def test_sync_client_picks_up_new_messages(http):
    seller_api = HttpChatApi(http, _token("U2"))
    buyer_api = HttpChatApi(http, _token("U1"))
    await buyer_api.send_message("U1_U2_R7", "Is this still available?")

    client = ConversationSyncClient(seller_api, interval=0.01)
    try:
        await client.start()
        assert client.state == SyncState.POLLING
        assert [m.body for m in client.messages] == ["Is this still available?"]

        await buyer_api.send_message("U1_U2_R7", "I can come today")
        for _ in range(100):
            if len(client.messages) == 2:
                break
            await asyncio.sleep(0.01)

        assert [m.body for m in client.messages][-1] == "I can come today"
        # Polling never marks read: the new message is still unread for the seller.
        assert (await seller_api.list_conversations())[0].unread_count == 1
    finally:
        await client.aclose()
