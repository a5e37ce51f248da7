"""Tail a conversation from the terminal: python -m marketplace_chat.client TOKEN [CONVERSATION_ID]"""
from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from marketplace_chat.api.v1.schemas.message import MessageResponse
from marketplace_chat.client.api import HttpChatApi
from marketplace_chat.client.sync_client import ConversationSyncClient
from marketplace_chat.client.config import client_settings
from marketplace_chat.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _print_messages(conversation_id: str, messages: list[MessageResponse]) -> None:
    print(f"--- {conversation_id} ({len(messages)} messages)")
    for msg in messages:
        marker = " " if msg.is_read else "*"
        print(f"{marker} {msg.created_at:%Y-%m-%d %H:%M} {msg.sender_id}: {msg.body}")


async def _tail(token: str, conversation_id: str | None, base_url: str) -> None:
    async with httpx.AsyncClient(base_url=base_url, timeout=client_settings.request_timeout) as http:
        client = ConversationSyncClient(
            HttpChatApi(http, token),
            on_messages=_print_messages,
        )
        if conversation_id:
            await client.select(conversation_id)
        else:
            await client.start()
        if client.selected is None:
            logger.info("No conversations yet")
            return
        try:
            await asyncio.Event().wait()
        finally:
            await client.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("token", help="bearer token of the viewing user")
    parser.add_argument("conversation_id", nargs="?", default=None)
    parser.add_argument("--base-url", default=client_settings.api_base_url)
    args = parser.parse_args()

    configure_logging(client_settings.log_level)
    try:
        asyncio.run(_tail(args.token, args.conversation_id, args.base_url))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
