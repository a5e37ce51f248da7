from __future__ import annotations

from fastapi import APIRouter

from marketplace_chat.api.deps import CurrentPrincipal, UoWDep
from marketplace_chat.api.v1.schemas.message import (
    DirectMessageRequest,
    MessageResponse,
    SendMessageRequest,
)
from marketplace_chat.services import message_service, read_state_service

router = APIRouter(prefix="/api/v1/chat", tags=["messages"])


@router.get("/conversations/{conversation_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    conversation_id: str,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MessageResponse]:
    messages = await message_service.list_messages(conversation_id, principal, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/conversations/{conversation_id}/read", response_model=list[MessageResponse])
async def open_conversation(
    conversation_id: str,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MessageResponse]:
    messages = await read_state_service.open_conversation(conversation_id, principal, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=201,
)
async def send_to_conversation(
    conversation_id: str,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.send_to_conversation(
        conversation_id, principal, body.body, uow,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.post("/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    body: DirectMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.send_message(
        principal, body.receiver_id, body.resource_id, body.body, uow,
    )
    return MessageResponse.model_validate(msg, from_attributes=True)
