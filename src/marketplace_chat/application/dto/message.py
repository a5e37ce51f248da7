from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class NewMessageDTO:
    """A validated message ready to be appended; the store assigns its id."""

    conversation_id: str
    sender_id: str
    receiver_id: str
    resource_id: str
    body: str
    created_at: datetime
