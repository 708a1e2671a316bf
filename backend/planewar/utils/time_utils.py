"""Time and identifier helpers."""
import time
import uuid
from typing import Container


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def generate_announcement_id(now: int, existing: Container[str] = ()) -> str:
    """Build an announcement id that does not collide with ``existing``.

    Format: ``announce_<ms>_<12 hex chars>``.
    """
    while True:
        candidate = f"announce_{now}_{uuid.uuid4().hex[:12]}"
        if candidate not in existing:
            return candidate
