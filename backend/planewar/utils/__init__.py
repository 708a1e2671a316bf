"""Utilities package."""
from .time_utils import generate_announcement_id, now_ms

__all__ = [
    "generate_announcement_id",
    "now_ms",
]
