"""Inbox: one summary per conversation, recomputed from the message log on every call."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from marketplace_chat.application.dto.principal import Principal
from marketplace_chat.application.uow import UnitOfWork
from marketplace_chat.domain.entities.conversation import ConversationSummary
from marketplace_chat.domain.entities.message import Message


def aggregate_conversations(
    user_id: str,
    messages: Iterable[Message],
) -> list[ConversationSummary]:
    """Group a user's messages by conversation, most recently active first.

    Input order does not matter; the last message is found by a linear scan.
    """
    groups: dict[str, ConversationSummary] = {}

    for msg in messages:
        summary = groups.get(msg.conversation_id)
        if summary is None:
            other = msg.receiver_id if msg.sender_id == user_id else msg.sender_id
            summary = ConversationSummary(
                conversation_id=msg.conversation_id,
                other_user_id=other,
                resource_id=msg.resource_id,
                last_message=msg,
                unread_count=0,
            )

        if msg.sort_key > summary.last_message.sort_key:
            summary = replace(summary, last_message=msg)
        if msg.receiver_id == user_id and not msg.is_read:
            summary = replace(summary, unread_count=summary.unread_count + 1)

        groups[msg.conversation_id] = summary

    return sorted(
        groups.values(),
        key=lambda s: s.last_message.sort_key,
        reverse=True,
    )


async def list_conversations(
    principal: Principal,
    uow: UnitOfWork,
) -> list[ConversationSummary]:
    messages = await uow.messages.list_by_participant(principal.user_id)
    summaries = aggregate_conversations(principal.user_id, messages)
    if not summaries:
        return []

    listings = await uow.listings.get_many({s.resource_id for s in summaries})
    return [replace(s, listing=listings.get(s.resource_id)) for s in summaries]
