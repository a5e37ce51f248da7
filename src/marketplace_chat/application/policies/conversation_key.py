"""Conversation identity: one key per unordered user pair and listing.

Key format: "<low user id>_<high user id>_<listing id>", where the two user
ids are ordered lexicographically. Identifiers are restricted to
``[A-Za-z0-9-]`` so the separator can never occur inside one.
"""
from __future__ import annotations

from marketplace_chat.application.exceptions import ValidationError
from marketplace_chat.domain.value_objects.conversation_key import ConversationKey
from marketplace_chat.domain.value_objects.ids import IDENTIFIER_RE, KEY_SEPARATOR


def validate_identifier(value: str, field: str) -> str:
    if not isinstance(value, str) or not IDENTIFIER_RE.fullmatch(value):
        raise ValidationError(f"Malformed {field}: {value!r}")
    return value


def resolve_conversation_id(user_a: str, user_b: str, resource_id: str) -> str:
    """Return the same key for (a, b, r) and (b, a, r)."""
    validate_identifier(user_a, "user id")
    validate_identifier(user_b, "user id")
    validate_identifier(resource_id, "resource id")
    if user_a == user_b:
        raise ValidationError("Cannot start a conversation with yourself")

    low, high = sorted((user_a, user_b))
    return str(ConversationKey(low, high, resource_id))


def parse_conversation_id(conversation_id: str) -> ConversationKey:
    parts = conversation_id.split(KEY_SEPARATOR) if isinstance(conversation_id, str) else []
    if len(parts) != 3:
        raise ValidationError(f"Malformed conversation id: {conversation_id!r}")

    low, high, resource_id = parts
    # Round-tripping rejects unordered pairs and bad identifiers alike.
    try:
        canonical = resolve_conversation_id(low, high, resource_id)
    except ValidationError as exc:
        raise ValidationError(f"Malformed conversation id: {conversation_id!r}") from exc
    if canonical != conversation_id:
        raise ValidationError(f"Malformed conversation id: {conversation_id!r}")
    return ConversationKey(low, high, resource_id)
