"""One-time script: create the Redis Streams consumer group for listing events."""
from __future__ import annotations

import asyncio
import logging

import redis.asyncio as aioredis

from marketplace_chat.config import settings
from marketplace_chat.infrastructure.bus.redis_streams import ensure_consumer_group

logger = logging.getLogger(__name__)


async def create_group() -> None:
    r = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        created = await ensure_consumer_group(
            r, settings.LISTING_EVENTS_STREAM, settings.LISTING_EVENTS_GROUP,
        )
        if not created:
            logger.info("Consumer group '%s' already exists", settings.LISTING_EVENTS_GROUP)
    finally:
        await r.aclose()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_group())


if __name__ == "__main__":
    main()
