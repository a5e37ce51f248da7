"""Redis Streams consumer for events published by other marketplace services."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

OnStreamEventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


async def ensure_consumer_group(redis: aioredis.Redis, stream: str, group: str) -> bool:
    """Create the group (and stream) if missing. Returns True when created."""
    try:
        await redis.xgroup_create(stream, group, id="$", mkstream=True)
    except aioredis.ResponseError as e:
        if "BUSYGROUP" in str(e):
            logger.debug("Consumer group %s already exists on %s", group, stream)
            return False
        raise
    logger.info("Created consumer group %s on %s", group, stream)
    return True


class RedisStreamConsumer:
    """XREADGROUP-based consumer for a single stream + consumer group."""

    def __init__(
        self,
        redis: aioredis.Redis,
        stream: str,
        group: str,
        consumer: str,
        callback: OnStreamEventCallback,
        *,
        batch_size: int = 10,
        block_ms: int = 5000,
        retry_delay: float = 5.0,
    ) -> None:
        self._redis = redis
        self._stream = stream
        self._group = group
        self._consumer = consumer
        self._callback = callback
        self._batch_size = batch_size
        self._block_ms = block_ms
        self._retry_delay = retry_delay
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        await ensure_consumer_group(self._redis, self._stream, self._group)
        self._task = asyncio.create_task(self._consume(), name="redis-stream-consumer")
        logger.info("Stream consumer started: stream=%s group=%s", self._stream, self._group)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("Stream consumer stopped")

    async def _read(self, last_id: str) -> list[tuple[str, dict[str, Any] | None]]:
        entries = await self._redis.xreadgroup(
            groupname=self._group,
            consumername=self._consumer,
            streams={self._stream: last_id},
            count=self._batch_size,
            block=None if last_id != ">" else self._block_ms,
        )
        return [msg for _stream_name, messages in entries or [] for msg in messages]

    async def _replay_pending(self) -> None:
        """Re-deliver entries this consumer read but never acked (e.g. before a crash)."""
        last_id = "0"
        while True:
            batch = await self._read(last_id)
            if not batch:
                return
            logger.info("Replaying %d pending stream entries", len(batch))
            for msg_id, fields in batch:
                await self._dispatch(msg_id, fields)
                last_id = msg_id

    async def _consume(self) -> None:
        replayed = False
        while True:
            try:
                if not replayed:
                    await self._replay_pending()
                    replayed = True
                for msg_id, fields in await self._read(">"):
                    await self._dispatch(msg_id, fields)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Stream consumer error, retrying in %ss", self._retry_delay)
                await asyncio.sleep(self._retry_delay)

    async def _dispatch(self, msg_id: str, fields: dict[str, Any] | None) -> None:
        if fields is None:
            # Pending entry whose payload was trimmed from the stream; nothing to apply.
            logger.warning("Stream entry %s was trimmed before processing; acking", msg_id)
            await self._redis.xack(self._stream, self._group, msg_id)
            return
        event_type = fields.get("event_type", "unknown")
        try:
            await self._callback(event_type, fields)
        except Exception:
            # Left un-acked; stays in the pending list for inspection or XCLAIM.
            logger.exception("Error processing stream message %s", msg_id)
            return
        await self._redis.xack(self._stream, self._group, msg_id)
