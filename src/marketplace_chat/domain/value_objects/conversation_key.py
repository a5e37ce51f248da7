from __future__ import annotations

from dataclasses import dataclass

from marketplace_chat.domain.value_objects.ids import KEY_SEPARATOR


@dataclass(frozen=True, slots=True)
class ConversationKey:
    """Parsed conversation identity: an ordered participant pair plus a listing."""

    low_user_id: str
    high_user_id: str
    resource_id: str

    @property
    def participants(self) -> tuple[str, str]:
        return self.low_user_id, self.high_user_id

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participants

    def other_participant(self, user_id: str) -> str:
        return self.high_user_id if user_id == self.low_user_id else self.low_user_id

    def __str__(self) -> str:
        return KEY_SEPARATOR.join((self.low_user_id, self.high_user_id, self.resource_id))
