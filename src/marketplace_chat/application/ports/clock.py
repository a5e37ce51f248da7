from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable, Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SystemClock:
    """UTC wall clock that never runs backwards within one process.

    Messages are ordered by ``(created_at, id)``; if NTP steps the wall clock
    back, new messages keep the last timestamp handed out instead of sorting
    before their predecessors.
    """

    def __init__(self, source: Callable[[], datetime] = _utc_now) -> None:
        self._source = source
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            ts = self._source()
            if self._last is not None and ts < self._last:
                ts = self._last
            self._last = ts
            return ts
