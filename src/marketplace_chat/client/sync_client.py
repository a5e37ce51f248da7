"""Polling sync client: keeps one selected conversation and the inbox roughly live.

There is no push channel. While a conversation is selected the client re-reads
it every ``interval`` seconds with the side-effect-free list call; only an
explicit selection (or a send) marks messages read.
"""
from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import Callable

from marketplace_chat.api.v1.schemas.conversation import ConversationSummaryResponse
from marketplace_chat.api.v1.schemas.message import MessageResponse
from marketplace_chat.client.api import ChatApi
from marketplace_chat.client.config import client_settings

logger = logging.getLogger(__name__)

OnMessages = Callable[[str, list[MessageResponse]], None]
OnConversations = Callable[[list[ConversationSummaryResponse]], None]


class SyncState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"


class ConversationSyncClient:
    def __init__(
        self,
        api: ChatApi,
        *,
        interval: float | None = None,
        on_messages: OnMessages | None = None,
        on_conversations: OnConversations | None = None,
    ) -> None:
        self._api = api
        self._interval = client_settings.poll_interval if interval is None else interval
        self._on_messages = on_messages
        self._on_conversations = on_conversations
        self._timer: asyncio.Task[None] | None = None
        self._ticks: set[asyncio.Task[None]] = set()

        self.selected: str | None = None
        self.messages: list[MessageResponse] = []
        self.conversations: list[ConversationSummaryResponse] = []

    @property
    def state(self) -> SyncState:
        if self._timer is not None and not self._timer.done():
            return SyncState.POLLING
        return SyncState.IDLE

    async def start(self) -> None:
        """Load the inbox and open the most recent conversation if none is selected."""
        await self.refresh_conversations()
        if self.selected is None and self.conversations:
            await self.select(self.conversations[0].conversation_id)

    async def refresh_conversations(self) -> None:
        self.conversations = await self._api.list_conversations()
        if self._on_conversations:
            self._on_conversations(self.conversations)

    async def select(self, conversation_id: str) -> None:
        await self._stop_timer()
        self.selected = conversation_id

        try:
            messages = await self._api.open_conversation(conversation_id)
        except Exception:
            logger.exception("Failed to open conversation %s", conversation_id)
        else:
            self._render(conversation_id, messages)

        if self.selected != conversation_id:
            # A newer selection arrived while we were opening this one.
            return
        # No await between the check above and the swap below.
        previous, self._timer = self._timer, asyncio.create_task(
            self._run_interval(conversation_id),
            name=f"sync-poll-{conversation_id}",
        )
        if previous is not None:
            previous.cancel()

    async def leave(self) -> None:
        self.selected = None
        self.messages = []
        await self._stop_timer()

    async def send(self, body: str) -> MessageResponse:
        if self.selected is None:
            raise RuntimeError("No conversation selected")
        conversation_id = self.selected

        msg = await self._api.send_message(conversation_id, body)
        self._render(conversation_id, await self._api.open_conversation(conversation_id))
        await self.refresh_conversations()
        return msg

    async def aclose(self) -> None:
        """Stop polling and wait for ticks still in flight."""
        await self.leave()
        if self._ticks:
            await asyncio.gather(*self._ticks, return_exceptions=True)

    async def _stop_timer(self) -> None:
        # Take the handle before awaiting so a timer installed meanwhile is not lost.
        timer, self._timer = self._timer, None
        if timer is None:
            return
        timer.cancel()
        try:
            await timer
        except asyncio.CancelledError:
            pass

    async def _run_interval(self, conversation_id: str) -> None:
        while True:
            await asyncio.sleep(self._interval)
            # Fire and forget: a slow tick never delays the next one.
            tick = asyncio.create_task(self._poll(conversation_id))
            self._ticks.add(tick)
            tick.add_done_callback(self._ticks.discard)

    async def _poll(self, conversation_id: str) -> None:
        try:
            messages = await self._api.list_messages(conversation_id)
        except Exception:
            logger.exception("Polling tick failed for conversation %s", conversation_id)
            return
        self._render(conversation_id, messages)

    def _render(self, conversation_id: str, messages: list[MessageResponse]) -> None:
        # Results for a conversation that is no longer selected are dropped.
        if conversation_id != self.selected:
            return
        self.messages = messages
        if self._on_messages:
            self._on_messages(conversation_id, messages)
