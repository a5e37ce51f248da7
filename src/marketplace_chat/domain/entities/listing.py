from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Listing:
    id: str
    owner_id: str
    title: str
    thumbnail_url: str | None = None
    is_active: bool = True
