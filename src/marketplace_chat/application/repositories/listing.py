from __future__ import annotations

from typing import Iterable, Protocol

from marketplace_chat.domain.entities.listing import Listing


class ListingReader(Protocol):
    async def get_by_id(self, listing_id: str) -> Listing | None: ...

    async def get_many(self, listing_ids: Iterable[str]) -> dict[str, Listing]: ...


class ListingWriter(Protocol):
    async def upsert(self, listing: Listing) -> None: ...

    async def deactivate(self, listing_id: str) -> None: ...
