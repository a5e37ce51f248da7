from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import InterfaceError, OperationalError

from marketplace_chat.application.exceptions import TransientStoreError

logger = logging.getLogger(__name__)


@contextmanager
def translate_db_errors() -> Iterator[None]:
    """Re-raise connectivity failures as TransientStoreError. No retries here."""
    try:
        yield
    except (OperationalError, InterfaceError, OSError) as exc:
        logger.warning("Message store unavailable: %s", exc)
        raise TransientStoreError("Message store temporarily unavailable") from exc
