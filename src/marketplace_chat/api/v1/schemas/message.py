from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    body: str


class DirectMessageRequest(BaseModel):
    """Send without a known conversation id; the key is derived server-side."""

    receiver_id: str
    resource_id: str
    body: str


class MessageResponse(BaseModel):
    id: int
    conversation_id: str
    sender_id: str
    receiver_id: str
    resource_id: str
    body: str
    created_at: datetime
    is_read: bool

    model_config = {"from_attributes": True}
