from __future__ import annotations

from dataclasses import dataclass

from marketplace_chat.domain.entities.listing import Listing
from marketplace_chat.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class ConversationSummary:
    """Inbox row derived from the message log; never persisted."""

    conversation_id: str
    other_user_id: str
    resource_id: str
    last_message: Message
    unread_count: int
    listing: Listing | None = None
