from __future__ import annotations

from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.infrastructure.db.errors import translate_db_errors
from marketplace_chat.infrastructure.db.mappers import listing as mapper
from marketplace_chat.infrastructure.db.models.listing import ListingModel


class ListingReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, listing_id: str) -> Listing | None:
        with translate_db_errors():
            result = await self._session.get(ListingModel, listing_id)
        return mapper.model_to_entity(result) if result else None

    async def get_many(self, listing_ids: Iterable[str]) -> dict[str, Listing]:
        ids = list(listing_ids)
        if not ids:
            return {}
        stmt = select(ListingModel).where(ListingModel.id.in_(ids))
        with translate_db_errors():
            result = await self._session.execute(stmt)
        return {m.id: mapper.model_to_entity(m) for m in result.scalars().all()}


class ListingWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, listing: Listing) -> None:
        values = {
            "owner_id": listing.owner_id,
            "title": listing.title,
            "thumbnail_url": listing.thumbnail_url,
            "is_active": listing.is_active,
        }
        stmt = (
            pg_insert(ListingModel)
            .values(id=listing.id, **values)
            .on_conflict_do_update(index_elements=[ListingModel.id], set_=values)
        )
        with translate_db_errors():
            await self._session.execute(stmt)

    async def deactivate(self, listing_id: str) -> None:
        stmt = (
            update(ListingModel)
            .where(ListingModel.id == listing_id)
            .values(is_active=False)
        )
        with translate_db_errors():
            await self._session.execute(stmt)
