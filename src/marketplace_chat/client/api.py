"""HTTP transport for the chat API, used by the polling sync client."""
from __future__ import annotations

from typing import Protocol

import httpx

from marketplace_chat.api.v1.schemas.conversation import ConversationSummaryResponse
from marketplace_chat.api.v1.schemas.message import MessageResponse
from marketplace_chat.application.exceptions import ERRORS_BY_STATUS

API_PREFIX = "/api/v1/chat"


class ChatApi(Protocol):
    async def resolve_conversation(self, other_user_id: str, resource_id: str) -> str: ...

    async def list_conversations(self) -> list[ConversationSummaryResponse]: ...

    async def open_conversation(self, conversation_id: str) -> list[MessageResponse]: ...

    async def list_messages(self, conversation_id: str) -> list[MessageResponse]: ...

    async def send_message(self, conversation_id: str, body: str) -> MessageResponse: ...


def _raise_for_status(response: httpx.Response) -> None:
    error_cls = ERRORS_BY_STATUS.get(response.status_code)
    if error_cls is None:
        response.raise_for_status()
        return
    try:
        detail = response.json().get("detail", "")
    except ValueError:
        detail = response.text
    raise error_cls(detail if isinstance(detail, str) else str(detail))


class HttpChatApi:
    """ChatApi over an ``httpx.AsyncClient``; the caller owns the client's lifetime."""

    def __init__(self, client: httpx.AsyncClient, token: str) -> None:
        self._client = client
        self._headers = {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self._client.request(
            method, f"{API_PREFIX}{path}", headers=self._headers, **kwargs,
        )
        _raise_for_status(response)
        return response

    async def resolve_conversation(self, other_user_id: str, resource_id: str) -> str:
        response = await self._request(
            "POST",
            "/conversations",
            json={"other_user_id": other_user_id, "resource_id": resource_id},
        )
        return response.json()["conversation_id"]

    async def list_conversations(self) -> list[ConversationSummaryResponse]:
        response = await self._request("GET", "/conversations")
        return [ConversationSummaryResponse.model_validate(c) for c in response.json()]

    async def open_conversation(self, conversation_id: str) -> list[MessageResponse]:
        response = await self._request("POST", f"/conversations/{conversation_id}/read")
        return [MessageResponse.model_validate(m) for m in response.json()]

    async def list_messages(self, conversation_id: str) -> list[MessageResponse]:
        response = await self._request("GET", f"/conversations/{conversation_id}/messages")
        return [MessageResponse.model_validate(m) for m in response.json()]

    async def send_message(self, conversation_id: str, body: str) -> MessageResponse:
        response = await self._request(
            "POST",
            f"/conversations/{conversation_id}/messages",
            json={"body": body},
        )
        return MessageResponse.model_validate(response.json())
