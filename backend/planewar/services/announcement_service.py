"""Announcement service - owns the in-memory announcement collection."""
import logging
import math
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..errors import NotFoundError, ValidationError
from ..models import (
    DAY_MS,
    DEFAULT_DURATION_DAYS,
    DEFAULT_PRIORITY,
    Announcement,
    Button,
    default_buttons,
)
from ..utils import generate_announcement_id, now_ms

REQUIRED_FIELDS = ("type", "title", "content")

# Wire name -> model attribute, for fields a partial update may replace.
UPDATABLE_FIELDS = {
    "type": "type",
    "title": "title",
    "content": "content",
    "image": "image",
    "link": "link",
    "linkText": "link_text",
    "showOnce": "show_once",
    "priority": "priority",
    "startTime": "start_time",
    "endTime": "end_time",
    "buttons": "buttons",
}
TEXT_FIELDS = ("type", "title", "content", "image", "link", "linkText")
INT_FIELDS = ("priority", "startTime", "endTime")


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not math.isfinite(value)):
        raise ValidationError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be an integer") from None


def _duration_ms(value: Any) -> int:
    """Convert a duration in days to milliseconds."""
    if isinstance(value, bool):
        raise ValidationError("duration must be a number of days")
    try:
        days = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("duration must be a number of days") from None
    if not math.isfinite(days) or not math.isfinite(days * DAY_MS):
        raise ValidationError("duration must be a finite number of days")
    return int(round(days * DAY_MS))


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def _as_text(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def _as_buttons(value: Any) -> List[Button]:
    if not isinstance(value, list):
        raise ValidationError("buttons must be a list")
    buttons = []
    for item in value:
        if not isinstance(item, dict) or not item.get("text"):
            raise ValidationError("each button needs a text")
        buttons.append(Button(text=str(item["text"]), action=str(item.get("action") or "close")))
    return buttons


def _coerce(name: str, value: Any) -> Any:
    """Validate a single wire field and convert it to its model value."""
    if name in TEXT_FIELDS:
        return _as_text(name, value)
    if name in INT_FIELDS:
        return _as_int(name, value)
    if name == "showOnce":
        return _as_bool(name, value)
    if name == "buttons":
        return _as_buttons(value)
    return value


class AnnouncementService:
    """Store for announcements shown to game clients.

    The collection is kept in insertion order. All operations hold a lock for
    their whole duration, so mutations are serialized and readers always see
    complete records. Callers only ever get copies.
    """

    def __init__(
        self,
        announcements: Optional[Iterable[Announcement]] = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the service.

        Args:
            announcements: Initial (seed) announcements.
            clock: Returns the current time in milliseconds since the epoch.
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._announcements: List[Announcement] = [a.copy() for a in announcements or []]

    def _find_index(self, ann_id: str) -> int:
        for idx, ann in enumerate(self._announcements):
            if ann.id == ann_id:
                return idx
        raise NotFoundError("Announcement not found")

    def reset(self, announcements: Iterable[Announcement]) -> None:
        """Replace the whole collection (used when seeding)."""
        with self._lock:
            self._announcements = [a.copy() for a in announcements]

    def list_active(self, now: Optional[int] = None) -> List[Dict]:
        """Get announcements visible at ``now``, highest priority first.

        Args:
            now: Timestamp in ms; defaults to the service clock.

        Returns:
            Announcements with ``startTime <= now <= endTime``. Ties keep
            insertion order.
        """
        if now is None:
            now = self._clock()
        with self._lock:
            active = [a for a in self._announcements if a.is_active(now)]
            active.sort(key=lambda a: a.priority, reverse=True)
            return [a.to_dict() for a in active]

    def list_all(self) -> List[Dict]:
        """Get every announcement in insertion order, expired ones included."""
        with self._lock:
            return [a.to_dict() for a in self._announcements]

    def get(self, ann_id: str) -> Dict:
        """Get a single announcement by id.

        Raises:
            NotFoundError: No announcement has that id.
        """
        with self._lock:
            return self._announcements[self._find_index(ann_id)].to_dict()

    def create(self, fields: Dict[str, Any], now: Optional[int] = None) -> Dict:
        """Create an announcement.

        Args:
            fields: ``type``, ``title`` and ``content`` are required; ``image``,
                ``link``, ``linkText``, ``showOnce``, ``priority``, ``duration``
                (days) and ``buttons`` are optional.
            now: Creation timestamp in ms; defaults to the service clock.

        Returns:
            The created announcement.

        Raises:
            ValidationError: A required field is missing or a field has the
                wrong type. The store is left unchanged.
        """
        missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
        if missing:
            raise ValidationError("type, title and content are required")

        priority = fields.get("priority")
        duration = fields.get("duration")
        buttons = fields.get("buttons")
        show_once = fields.get("showOnce")
        duration_ms = DEFAULT_DURATION_DAYS * DAY_MS if duration is None else _duration_ms(duration)

        values = {
            "type": _as_text("type", fields["type"]),
            "title": _as_text("title", fields["title"]),
            "content": _as_text("content", fields["content"]),
            "image": _as_text("image", fields.get("image") or ""),
            "link": _as_text("link", fields.get("link") or ""),
            "link_text": _as_text("linkText", fields.get("linkText") or ""),
            "show_once": False if show_once is None else _as_bool("showOnce", show_once),
            "priority": DEFAULT_PRIORITY if priority is None else _as_int("priority", priority),
            "buttons": default_buttons() if buttons is None else _as_buttons(buttons),
        }

        with self._lock:
            if now is None:
                now = self._clock()
            ann_id = generate_announcement_id(now, {a.id for a in self._announcements})
            announcement = Announcement(
                id=ann_id,
                start_time=now,
                end_time=now + duration_ms,
                created_at=now,
                updated_at=now,
                **values,
            )
            self._announcements.append(announcement)
            logging.info("Created announcement %s (%s)", ann_id, announcement.title)
            return announcement.to_dict()

    def update(self, ann_id: str, fields: Dict[str, Any], now: Optional[int] = None) -> Dict:
        """Merge a partial field set over an existing announcement.

        Fields present in ``fields`` replace stored values; absent ones are
        untouched. ``id``, ``createdAt`` and ``updatedAt`` are ignored, as are
        keys that are not announcement fields.

        Raises:
            NotFoundError: No announcement has that id.
            ValidationError: A supplied field has the wrong type.
        """
        with self._lock:
            idx = self._find_index(ann_id)
            current = self._announcements[idx]
            changes = {
                UPDATABLE_FIELDS[name]: _coerce(name, value)
                for name, value in fields.items()
                if name in UPDATABLE_FIELDS
            }
            ignored = [name for name in fields if name not in UPDATABLE_FIELDS]
            if ignored:
                logging.debug("Ignoring fields %s in update of %s", ignored, ann_id)
            if now is None:
                now = self._clock()
            updated = current.copy()
            for attr, value in changes.items():
                setattr(updated, attr, value)
            updated.updated_at = max(now, current.updated_at + 1)
            self._announcements[idx] = updated
            logging.info("Updated announcement %s (%s)", ann_id, ", ".join(changes) or "no fields")
            return updated.to_dict()

    def delete(self, ann_id: str) -> None:
        """Remove an announcement permanently.

        Raises:
            NotFoundError: No announcement has that id.
        """
        with self._lock:
            idx = self._find_index(ann_id)
            del self._announcements[idx]
        logging.info("Deleted announcement %s", ann_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._announcements)
