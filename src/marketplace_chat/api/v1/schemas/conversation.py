from __future__ import annotations

from pydantic import BaseModel

from marketplace_chat.api.v1.schemas.message import MessageResponse


class ResolveConversationRequest(BaseModel):
    other_user_id: str
    resource_id: str


class ResolveConversationResponse(BaseModel):
    conversation_id: str


class ListingPreviewResponse(BaseModel):
    id: str
    owner_id: str
    title: str
    thumbnail_url: str | None

    model_config = {"from_attributes": True}


class ConversationSummaryResponse(BaseModel):
    conversation_id: str
    other_user_id: str
    resource_id: str
    listing: ListingPreviewResponse | None
    last_message: MessageResponse
    unread_count: int

    model_config = {"from_attributes": True}
