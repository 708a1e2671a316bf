"""Startup announcement set, built in or loaded from JSON."""
import json
import logging
from pathlib import Path
from typing import List, Optional

from ..models import DAY_MS, DEFAULT_DURATION_DAYS, DEFAULT_PRIORITY, Announcement, Button


def default_announcements(now: int) -> List[Announcement]:
    """Built-in announcements: a welcome notice and a limited-time event."""
    return [
        Announcement(
            id="announce_001",
            type="important",
            title="Welcome to Plane War!",
            content=(
                "Thanks for playing Plane War!\n\n"
                "Features:\n"
                "- Dynamic difficulty\n"
                "- 8 enemy aircraft types\n"
                "- Achievements\n"
                "- Statistics\n"
                "- Fighter skins"
            ),
            priority=100,
            start_time=now - DAY_MS,
            end_time=now + 30 * DAY_MS,
            buttons=[Button(text="Start game", action="close")],
            created_at=now,
            updated_at=now,
        ),
        Announcement(
            id="announce_002",
            type="event",
            title="Limited-time event",
            content="Check in daily during the event to earn double coins!",
            priority=90,
            start_time=now,
            end_time=now + 7 * DAY_MS,
            created_at=now,
            updated_at=now,
        ),
    ]


def _from_seed_record(record: dict, now: int) -> Announcement:
    start_time = int(record.get("startTime", now))
    end_time = record.get("endTime")
    if end_time is None:
        end_time = start_time + int(float(record.get("duration", DEFAULT_DURATION_DAYS)) * DAY_MS)
    data = dict(record)
    data.update(
        {
            "startTime": start_time,
            "endTime": int(end_time),
            "createdAt": int(record.get("createdAt", now)),
            "updatedAt": int(record.get("updatedAt", record.get("createdAt", now))),
            "priority": record.get("priority", DEFAULT_PRIORITY),
        }
    )
    return Announcement.from_dict(data)


def load_seed_from_json(path: Path, now: int) -> Optional[List[Announcement]]:
    """Load seed announcements from a JSON file.

    The file holds ``{"announcements": [...]}`` using the wire field names.
    Records without ``startTime``/``endTime`` get a window starting at ``now``
    and lasting ``duration`` days.

    Returns:
        List of announcements, or None if the file could not be used.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        announcements = [_from_seed_record(r, now) for r in data.get("announcements", [])]
        logging.info(f"Loaded {len(announcements)} seed announcements from {path}")
        return announcements

    except FileNotFoundError:
        logging.error(f"Seed file not found: {path}")
        return None
    except json.JSONDecodeError as exc:
        logging.error(f"Invalid JSON in seed file: {exc}")
        return None
    except (KeyError, TypeError, ValueError, OverflowError, AttributeError) as exc:
        logging.error(f"Invalid announcement in seed file {path}: {exc}")
        return None


def load_seed_announcements(now: int, seed_file: str = "") -> List[Announcement]:
    """Get the startup announcement set.

    Args:
        now: Current time in ms.
        seed_file: Optional JSON seed file; the built-in set is used when it
            is empty or unusable.
    """
    if seed_file:
        loaded = load_seed_from_json(Path(seed_file), now)
        if loaded is not None:
            return loaded
    return default_announcements(now)
