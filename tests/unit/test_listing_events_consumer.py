from __future__ import annotations

import pytest

from marketplace_chat.application.exceptions import ValidationError
from marketplace_chat.services import message_service
from marketplace_chat.workers.listing_events_consumer import apply_listing_event
from tests.conftest import FakeUoW


@pytest.mark.asyncio
async def test_upsert_creates_listing():
    uow = FakeUoW()

    applied = await apply_listing_event(
        "listing.upserted",
        {"listing_id": "R7", "owner_id": "U2", "title": "Puppy", "thumbnail_url": ""},
        uow,
    )

    assert applied is True
    listing = uow.listings._store["R7"]
    assert listing.owner_id == "U2"
    assert listing.title == "Puppy"
    assert listing.thumbnail_url is None
    assert listing.is_active is True
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_deleted_listing_rejects_new_messages(uow):
    await message_service.append_message("U1", "U2", "R7", "before", uow)

    await apply_listing_event("listing.deleted", {"listing_id": "R7"}, uow)

    assert uow.listings._store["R7"].is_active is False
    with pytest.raises(ValidationError):
        await message_service.append_message("U1", "U2", "R7", "after", uow)


@pytest.mark.asyncio
async def test_unknown_event_is_ignored():
    uow = FakeUoW()

    applied = await apply_listing_event("listing.viewed", {"listing_id": "R7"}, uow)

    assert applied is False
    assert uow.commits == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "event_type, fields",
    [
        ("listing.upserted", {"owner_id": "U2", "title": "Puppy"}),
        ("listing.upserted", {"listing_id": "R_7", "owner_id": "U2"}),
        ("listing.upserted", {"listing_id": "R7"}),
        ("listing.deleted", {}),
    ],
)
async def test_malformed_event_is_skipped(event_type, fields, uow):
    applied = await apply_listing_event(event_type, fields, uow)

    assert applied is False
    assert uow.commits == 0
    assert uow.listings._store["R7"].is_active is True


@pytest.mark.asyncio
async def test_upsert_can_reactivate_listing(uow):
    await apply_listing_event("listing.deleted", {"listing_id": "R7"}, uow)
    await apply_listing_event("listing.upserted", {"listing_id": "R7", "owner_id": "U2", "title": "Puppy"}, uow)

    assert uow.listings._store["R7"].is_active is True
    msg = await message_service.append_message("U1", "U2", "R7", "back again?", uow)
    assert msg.resource_id == "R7"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "flag, expected",
    [
        ("0", False),
        ("false", False),
        ("False", False),
        (" no ", False),
        ("OFF", False),
        ("1", True),
        ("true", True),
        ("yes", True),
        (None, True),
    ],
)
async def test_upsert_carries_active_flag(flag, expected):
    uow = FakeUoW()
    fields = {"listing_id": "R9", "owner_id": "U2", "title": "Sold sofa"}
    if flag is not None:
        fields["is_active"] = flag

    await apply_listing_event("listing.upserted", fields, uow)

    assert uow.listings._store["R9"].is_active is expected
