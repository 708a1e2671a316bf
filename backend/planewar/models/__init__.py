"""Models package."""
from .announcement import (
    DAY_MS,
    DEFAULT_DURATION_DAYS,
    DEFAULT_PRIORITY,
    Announcement,
    Button,
    default_buttons,
)

__all__ = [
    "DAY_MS",
    "DEFAULT_DURATION_DAYS",
    "DEFAULT_PRIORITY",
    "Announcement",
    "Button",
    "default_buttons",
]
