from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from marketplace_chat.infrastructure.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

_CHECK_TIMEOUT = 2.0


async def _check_message_store(request: Request) -> None:
    async with AsyncSessionLocal() as session:
        await session.execute(text("SELECT 1 FROM messages LIMIT 1"))


async def _check_listing_stream(request: Request) -> None:
    await request.app.state.redis.ping()


_CHECKS: dict[str, Callable[[Request], Awaitable[None]]] = {
    "message_store": _check_message_store,
    "listing_stream": _check_listing_stream,
}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    checks: dict[str, str] = {}
    for name, check in _CHECKS.items():
        try:
            await asyncio.wait_for(check(request), timeout=_CHECK_TIMEOUT)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Readiness check %s failed: %r", name, exc)
            checks[name] = f"error: {exc!r}"
        else:
            checks[name] = "ok"

    ready = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "unavailable", "checks": checks},
    )
