from __future__ import annotations

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_chat.application.dto.message import NewMessageDTO
from marketplace_chat.domain.entities.message import Message
from marketplace_chat.infrastructure.db.errors import translate_db_errors
from marketplace_chat.infrastructure.db.mappers import message as mapper
from marketplace_chat.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_by_conversation(self, conversation_id: str) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        with translate_db_errors():
            result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_by_participant(self, user_id: str) -> list[Message]:
        stmt = select(MessageModel).where(
            or_(
                MessageModel.sender_id == user_id,
                MessageModel.receiver_id == user_id,
            )
        )
        with translate_db_errors():
            result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, message: NewMessageDTO) -> Message:
        stmt = (
            insert(MessageModel)
            .values(**mapper.dto_to_values(message))
            .returning(MessageModel)
        )
        with translate_db_errors():
            result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def mark_read(self, conversation_id: str, receiver_id: str) -> int:
        # Single UPDATE: rows inserted after it runs stay unread.
        stmt = (
            update(MessageModel)
            .where(
                MessageModel.conversation_id == conversation_id,
                MessageModel.receiver_id == receiver_id,
                MessageModel.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        with translate_db_errors():
            result = await self._session.execute(stmt)
        return result.rowcount or 0
