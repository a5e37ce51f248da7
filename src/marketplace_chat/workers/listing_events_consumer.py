"""Consumer for listing lifecycle events via Redis Streams.

Keeps the local ``listings`` table in step with the listings service so that
message appends can validate their resource and inbox summaries can show a
title and thumbnail.
"""
from __future__ import annotations

import asyncio
import logging
import os
import signal
import socket
from typing import Any

import redis.asyncio as aioredis

from marketplace_chat.application.exceptions import ValidationError
from marketplace_chat.application.policies.conversation_key import validate_identifier
from marketplace_chat.application.uow import UnitOfWork
from marketplace_chat.config import settings
from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.infrastructure.bus.redis_streams import RedisStreamConsumer
from marketplace_chat.infrastructure.db.session import AsyncSessionLocal, dispose_engine
from marketplace_chat.infrastructure.db.uow import SqlAlchemyUoW
from marketplace_chat.logging_config import configure_logging

logger = logging.getLogger(__name__)

_FALSE_FLAGS = frozenset({"0", "false", "no", "off"})


def _flag(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() not in _FALSE_FLAGS


def _listing_from_fields(fields: dict[str, Any]) -> Listing:
    listing_id = validate_identifier(fields.get("listing_id", ""), "listing_id")
    owner_id = validate_identifier(fields.get("owner_id", ""), "owner_id")
    return Listing(
        id=listing_id,
        owner_id=owner_id,
        title=fields.get("title", ""),
        thumbnail_url=fields.get("thumbnail_url") or None,
        is_active=_flag(fields.get("is_active")),
    )


async def apply_listing_event(event_type: str, fields: dict[str, Any], uow: UnitOfWork) -> bool:
    """Apply one event to the listing read model. Returns False for skipped events.

    Malformed events are skipped rather than raised: redelivery cannot fix them,
    and an un-acked entry would be replayed on every restart.
    """
    try:
        if event_type == "listing.upserted":
            listing = _listing_from_fields(fields)
            await uow.listings_w.upsert(listing)
            listing_id = listing.id
        elif event_type == "listing.deleted":
            listing_id = validate_identifier(fields.get("listing_id", ""), "listing_id")
            await uow.listings_w.deactivate(listing_id)
        else:
            logger.debug("Ignoring unknown event: %s", event_type)
            return False
    except ValidationError as exc:
        logger.warning("Skipping malformed %s event: %s", event_type, exc.detail)
        return False

    await uow.commit()
    logger.info("Applied %s for listing %s", event_type, listing_id)
    return True


async def _handle_event(event_type: str, fields: dict[str, Any]) -> None:
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            await apply_listing_event(event_type, fields, uow)


def consumer_name() -> str:
    """Stable per host and process slot, so a restarted worker replays its own pending entries."""
    slot = os.environ.get("WORKER_SLOT", "0")
    return f"{socket.gethostname()}-{slot}"


async def run_consumer() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    consumer = RedisStreamConsumer(
        redis=redis,
        stream=settings.LISTING_EVENTS_STREAM,
        group=settings.LISTING_EVENTS_GROUP,
        consumer=consumer_name(),
        callback=_handle_event,
    )

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await consumer.start()
    logger.info("Listing events consumer started (%s)", consumer_name())
    try:
        await stop.wait()
        logger.info("Shutdown requested")
    finally:
        await consumer.stop()
        await redis.aclose()
        await dispose_engine()


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(run_consumer())


if __name__ == "__main__":
    main()
