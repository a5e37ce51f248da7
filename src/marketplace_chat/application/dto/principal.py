from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """The acting marketplace user; ``user_id`` is the verified token subject."""

    user_id: str
