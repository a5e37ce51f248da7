from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    conversation_id: str
    sender_id: str
    receiver_id: str
    resource_id: str
    body: str
    created_at: datetime
    is_read: bool = False

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Timeline position; the store-assigned id breaks timestamp ties."""
        return self.created_at, self.id
