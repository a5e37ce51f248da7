from __future__ import annotations

from fastapi import APIRouter

from marketplace_chat.api.deps import CurrentPrincipal, UoWDep
from marketplace_chat.api.v1.schemas.conversation import (
    ConversationSummaryResponse,
    ResolveConversationRequest,
    ResolveConversationResponse,
)
from marketplace_chat.services import conversation_service, inbox_service

router = APIRouter(prefix="/api/v1/chat/conversations", tags=["conversations"])


@router.post("", response_model=ResolveConversationResponse)
async def resolve_conversation(
    body: ResolveConversationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ResolveConversationResponse:
    conversation_id = await conversation_service.resolve_conversation(
        principal, body.other_user_id, body.resource_id, uow,
    )
    return ResolveConversationResponse(conversation_id=conversation_id)


@router.get("", response_model=list[ConversationSummaryResponse])
async def list_conversations(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[ConversationSummaryResponse]:
    summaries = await inbox_service.list_conversations(principal, uow)
    return [
        ConversationSummaryResponse.model_validate(s, from_attributes=True)
        for s in summaries
    ]
