from __future__ import annotations

from typing import Protocol

from marketplace_chat.application.dto.message import NewMessageDTO
from marketplace_chat.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_by_conversation(self, conversation_id: str) -> list[Message]:
        """All messages of a conversation, ascending by (created_at, id)."""
        ...

    async def list_by_participant(self, user_id: str) -> list[Message]:
        """Every message the user sent or received. Unordered."""
        ...


class MessageWriter(Protocol):
    async def append(self, message: NewMessageDTO) -> Message: ...

    async def mark_read(self, conversation_id: str, receiver_id: str) -> int:
        """Flip every unread message addressed to receiver_id in one statement.

        Returns the number of messages changed.
        """
        ...
