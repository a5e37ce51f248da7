from __future__ import annotations

import logging

from marketplace_chat.application.dto.message import NewMessageDTO
from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.exceptions import ValidationError
from marketplace_chat.application.policies.conversation_key import resolve_conversation_id
from marketplace_chat.application.policies.permissions import assert_conversation_access
from marketplace_chat.application.ports.clock import Clock, SystemClock
from marketplace_chat.application.uow import UnitOfWork
from marketplace_chat.domain.entities.message import Message

logger = logging.getLogger(__name__)

_system_clock = SystemClock()


async def append_message(
    sender_id: str,
    receiver_id: str,
    resource_id: str,
    body: str,
    uow: UnitOfWork,
    *,
    clock: Clock = _system_clock,
) -> Message:
    """Validate and persist a new unread message. Does not commit."""
    if not body or not body.strip():
        raise ValidationError("Message body must not be empty")

    conversation_id = resolve_conversation_id(sender_id, receiver_id, resource_id)

    listing = await uow.listings.get_by_id(resource_id)
    if listing is None or not listing.is_active:
        raise ValidationError(f"Listing {resource_id} does not exist")

    return await uow.messages_w.append(
        NewMessageDTO(
            conversation_id=conversation_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            resource_id=resource_id,
            body=body,
            created_at=clock.now(),
        )
    )


async def send_message(
    principal: Principal,
    receiver_id: str,
    resource_id: str,
    body: str,
    uow: UnitOfWork,
    *,
    clock: Clock = _system_clock,
) -> Message:
    msg = await append_message(
        principal.user_id, receiver_id, resource_id, body, uow, clock=clock,
    )
    await uow.commit()
    logger.info(
        "Message %s appended to conversation %s", msg.id, msg.conversation_id,
    )
    return msg


async def send_to_conversation(
    conversation_id: str,
    principal: Principal,
    body: str,
    uow: UnitOfWork,
    *,
    clock: Clock = _system_clock,
) -> Message:
    """Send within an existing key; receiver and listing are read from the key itself."""
    key = assert_conversation_access(principal, conversation_id)
    return await send_message(
        principal,
        key.other_participant(principal.user_id),
        key.resource_id,
        body,
        uow,
        clock=clock,
    )


async def list_messages(
    conversation_id: str,
    principal: Principal,
    uow: UnitOfWork,
) -> list[Message]:
    assert_conversation_access(principal, conversation_id)
    return await uow.messages.list_by_conversation(conversation_id)
