from __future__ import annotations

from marketplace_chat.application.dto.message import NewMessageDTO
from marketplace_chat.domain.entities.message import Message
from marketplace_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        conversation_id=model.conversation_id,
        sender_id=model.sender_id,
        receiver_id=model.receiver_id,
        resource_id=model.resource_id,
        body=model.body,
        created_at=model.created_at,
        is_read=model.is_read,
    )


def dto_to_values(dto: NewMessageDTO) -> dict[str, object]:
    return {
        "conversation_id": dto.conversation_id,
        "sender_id": dto.sender_id,
        "receiver_id": dto.receiver_id,
        "resource_id": dto.resource_id,
        "body": dto.body,
        "created_at": dto.created_at,
        "is_read": False,
    }
