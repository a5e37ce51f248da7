"""Root conftest: loads .env.test before any module imports.

``marketplace_chat.config.settings`` is built at import time, so the test
environment has to be in ``os.environ`` before the first test module loads.
Variables already set in the real environment win.
"""
from __future__ import annotations

import os
from pathlib import Path


def _load_env_file(path: Path) -> None:
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        os.environ.setdefault(key.strip(), value.strip())


_env_test = Path(__file__).resolve().parent / ".env.test"
if _env_test.exists():
    _load_env_file(_env_test)
