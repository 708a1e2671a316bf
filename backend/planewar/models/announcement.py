"""Announcement model definition."""
from dataclasses import dataclass, field, replace
from typing import List

DAY_MS = 86_400_000
DEFAULT_PRIORITY = 50
DEFAULT_DURATION_DAYS = 30


@dataclass(frozen=True)
class Button:
    """A button shown under an announcement."""

    text: str
    action: str = "close"

    def to_dict(self) -> dict:
        return {"text": self.text, "action": self.action}


def default_buttons() -> List[Button]:
    return [Button(text="acknowledge", action="close")]


@dataclass
class Announcement:
    """Represents a timed, prioritized message shown to game clients.

    Times are milliseconds since the epoch.
    """

    id: str
    type: str
    title: str
    content: str
    start_time: int
    end_time: int
    created_at: int
    updated_at: int
    image: str = ""
    link: str = ""
    link_text: str = ""
    show_once: bool = False
    priority: int = DEFAULT_PRIORITY
    buttons: List[Button] = field(default_factory=default_buttons)

    def is_active(self, now: int) -> bool:
        """Return True if ``now`` falls inside the visibility window (inclusive)."""
        return self.start_time <= now <= self.end_time

    def copy(self) -> "Announcement":
        return replace(self, buttons=list(self.buttons))

    def to_dict(self) -> dict:
        """Convert announcement to its JSON wire form."""
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "content": self.content,
            "image": self.image,
            "link": self.link,
            "linkText": self.link_text,
            "showOnce": self.show_once,
            "priority": self.priority,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "buttons": [b.to_dict() for b in self.buttons],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Announcement":
        """Create announcement from its JSON wire form."""
        buttons = data.get("buttons")
        return cls(
            id=data["id"],
            type=data.get("type", "normal"),
            title=data.get("title", ""),
            content=data.get("content", ""),
            start_time=int(data["startTime"]),
            end_time=int(data["endTime"]),
            created_at=int(data["createdAt"]),
            updated_at=int(data.get("updatedAt", data["createdAt"])),
            image=data.get("image", ""),
            link=data.get("link", ""),
            link_text=data.get("linkText", ""),
            show_once=bool(data.get("showOnce", False)),
            priority=int(data.get("priority", DEFAULT_PRIORITY)),
            buttons=(
                [Button(text=b["text"], action=b.get("action", "close")) for b in buttons]
                if buttons
                else default_buttons()
            ),
        )
