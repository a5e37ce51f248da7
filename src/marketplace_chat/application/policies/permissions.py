from __future__ import annotations

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.exceptions import ForbiddenError
from marketplace_chat.application.policies.conversation_key import parse_conversation_id
from marketplace_chat.domain.value_objects.conversation_key import ConversationKey


def assert_conversation_access(
    principal: Principal,
    conversation_id: str,
) -> ConversationKey:
    """Raise if the key is malformed or the principal is not one of its two participants."""
    key = parse_conversation_id(conversation_id)
    if not key.has_participant(principal.user_id):
        raise ForbiddenError("Not a participant of this conversation")
    return key
