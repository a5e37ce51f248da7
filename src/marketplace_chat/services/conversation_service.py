from __future__ import annotations

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.exceptions import NotFoundError
from marketplace_chat.application.policies.conversation_key import (
    resolve_conversation_id,
    validate_identifier,
)
from marketplace_chat.application.uow import UnitOfWork


async def resolve_conversation(
    principal: Principal,
    other_user_id: str,
    resource_id: str,
    uow: UnitOfWork,
) -> str:
    """Return the conversation key for the caller, the other user and a listing.

    Nothing is persisted: the conversation starts to exist with its first message.
    A deactivated listing resolves like a missing one, since nothing can be sent
    about it.
    """
    validate_identifier(resource_id, "resource id")
    listing = await uow.listings.get_by_id(resource_id)
    if listing is None or not listing.is_active:
        raise NotFoundError("Listing not found")
    return resolve_conversation_id(principal.user_id, other_user_id, resource_id)
