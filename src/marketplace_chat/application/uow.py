from __future__ import annotations

from typing import Protocol

from marketplace_chat.application.repositories.listing import ListingReader, ListingWriter
from marketplace_chat.application.repositories.message import MessageReader, MessageWriter


class UnitOfWork(Protocol):
    messages: MessageReader
    messages_w: MessageWriter
    listings: ListingReader
    listings_w: ListingWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
