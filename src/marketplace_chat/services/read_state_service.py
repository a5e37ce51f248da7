from __future__ import annotations

import logging

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.policies.permissions import assert_conversation_access
from marketplace_chat.application.uow import UnitOfWork
from marketplace_chat.domain.entities.message import Message

logger = logging.getLogger(__name__)


async def open_conversation(
    conversation_id: str,
    principal: Principal,
    uow: UnitOfWork,
) -> list[Message]:
    """Fetch the conversation, then mark the viewer's unread messages read.

    The returned list is the snapshot taken before marking, so messages in it
    keep the read flags they had when fetched. Messages appended between the
    fetch and the mark are flipped too, without appearing in the snapshot.
    """
    assert_conversation_access(principal, conversation_id)

    messages = await uow.messages.list_by_conversation(conversation_id)
    updated = await uow.messages_w.mark_read(conversation_id, principal.user_id)
    await uow.commit()

    if updated:
        logger.debug(
            "Marked %d messages read in %s for %s",
            updated, conversation_id, principal.user_id,
        )
    return messages
