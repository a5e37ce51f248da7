from __future__ import annotations

import logging
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_chat.infrastructure.db.errors import translate_db_errors
from marketplace_chat.infrastructure.db.repositories.listing import (
    ListingReaderRepo,
    ListingWriterRepo,
)
from marketplace_chat.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUoW:
    """One request or event worth of work over a single AsyncSession.

    Nothing is persisted unless a service calls ``commit()``; leaving the block
    with an exception rolls back.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.listings = ListingReaderRepo(session)
        self.listings_w = ListingWriterRepo(session)

    async def commit(self) -> None:
        with translate_db_errors():
            await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            return
        try:
            await self.rollback()
        except Exception:  # noqa: BLE001
            # The connection is often already gone here; keep the original error.
            logger.warning("Rollback after %s failed", exc_type.__name__, exc_info=True)
