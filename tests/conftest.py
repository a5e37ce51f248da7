"""Shared test fixtures."""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Iterable

import pytest

from marketplace_chat.application.dto.message import NewMessageDTO
from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.exceptions import TransientStoreError
from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.domain.entities.message import Message

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def u1() -> Principal:
    return Principal(user_id="U1")


@pytest.fixture
def u2() -> Principal:
    return Principal(user_id="U2")


@dataclass
class StepClock:
    """Each call to now() is ``step`` later than the previous one."""

    start: datetime = T0
    step: timedelta = timedelta(seconds=1)
    _calls: int = 0

    def now(self) -> datetime:
        ts = self.start + self.step * self._calls
        self._calls += 1
        return ts


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


def make_listing(listing_id: str = "R7", owner_id: str = "U2", **kwargs) -> Listing:
    return Listing(
        id=listing_id,
        owner_id=owner_id,
        title=kwargs.pop("title", f"Listing {listing_id}"),
        **kwargs,
    )


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)
    unavailable: bool = False
    # Runs after list_by_conversation took its snapshot; used to stage races.
    after_list: Callable[[], Awaitable[None]] | None = None

    def _check(self) -> None:
        if self.unavailable:
            raise TransientStoreError("Message store temporarily unavailable")

    async def list_by_conversation(self, conversation_id: str) -> list[Message]:
        self._check()
        snapshot = sorted(
            (m for m in self._messages if m.conversation_id == conversation_id),
            key=lambda m: m.sort_key,
        )
        if self.after_list is not None:
            await self.after_list()
        return snapshot

    async def list_by_participant(self, user_id: str) -> list[Message]:
        self._check()
        return [m for m in self._messages if user_id in (m.sender_id, m.receiver_id)]


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    async def append(self, message: NewMessageDTO) -> Message:
        self._reader._check()
        stored = Message(
            id=next(self._ids),
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            resource_id=message.resource_id,
            body=message.body,
            created_at=message.created_at,
        )
        self._reader._messages.append(stored)
        return stored

    async def mark_read(self, conversation_id: str, receiver_id: str) -> int:
        self._reader._check()
        updated = 0
        for i, m in enumerate(self._reader._messages):
            if m.conversation_id == conversation_id and m.receiver_id == receiver_id and not m.is_read:
                self._reader._messages[i] = replace(m, is_read=True)
                updated += 1
        return updated


@dataclass
class FakeListingReader:
    _store: dict[str, Listing] = field(default_factory=dict)

    async def get_by_id(self, listing_id: str) -> Listing | None:
        return self._store.get(listing_id)

    async def get_many(self, listing_ids: Iterable[str]) -> dict[str, Listing]:
        return {i: self._store[i] for i in listing_ids if i in self._store}


@dataclass
class FakeListingWriter:
    _reader: FakeListingReader

    async def upsert(self, listing: Listing) -> None:
        self._reader._store[listing.id] = listing

    async def deactivate(self, listing_id: str) -> None:
        current = self._reader._store.get(listing_id)
        if current is not None:
            self._reader._store[listing_id] = replace(current, is_active=False)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    listings: FakeListingReader = field(default_factory=FakeListingReader)
    listings_w: FakeListingWriter | None = None
    commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.listings_w is None:
            self.listings_w = FakeListingWriter(self.listings)

    def add_listing(self, listing: Listing) -> Listing:
        self.listings._store[listing.id] = listing
        return listing

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


@pytest.fixture
def uow() -> FakeUoW:
    uow = FakeUoW()
    uow.add_listing(make_listing("R7", owner_id="U2"))
    return uow
