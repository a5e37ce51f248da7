"""Seed development data: a listing and a short buyer/seller exchange about it."""
from __future__ import annotations

import asyncio
import logging

from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.infrastructure.db.session import AsyncSessionLocal, create_tables, dispose_engine
from marketplace_chat.infrastructure.db.uow import SqlAlchemyUoW
from marketplace_chat.services import message_service

logger = logging.getLogger(__name__)

SELLER = "seller-1"
BUYER = "buyer-1"
LISTING = "listing-1"


async def seed() -> None:
    await create_tables()

    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        await uow.listings_w.upsert(
            Listing(
                id=LISTING,
                owner_id=SELLER,
                title="Golden retriever puppy",
                thumbnail_url=None,
            )
        )

        exchange = [
            (BUYER, SELLER, "Hi! Is this still available?"),
            (SELLER, BUYER, "Yes, she is. Would you like to visit this weekend?"),
            (BUYER, SELLER, "Saturday morning works for me."),
        ]
        last = None
        for sender_id, receiver_id, body in exchange:
            last = await message_service.append_message(
                sender_id, receiver_id, LISTING, body, uow,
            )

        await uow.commit()
        logger.info("Seeded conversation %s with %d messages", last.conversation_id, len(exchange))


async def _main() -> None:
    try:
        await seed()
    finally:
        await dispose_engine()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())


if __name__ == "__main__":
    main()
