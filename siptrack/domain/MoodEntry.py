"""MoodEntry domain entity: a daily mood level (1-5) with optional notes and tags."""
from typing import List, Optional
from uuid import uuid4

from siptrack.utilities.coercion import local_day, now_iso, parse_timestamp, to_number, to_tags
from siptrack.utilities.constants import MAX_MOOD, MIN_MOOD, MOOD_EMOJI, MOOD_LABELS, NEUTRAL_MOOD


def normalize_mood_level(value) -> int:
    """Mood as an int in 1..5; anything non-numeric becomes neutral."""
    number = to_number(value, float(NEUTRAL_MOOD))
    return max(MIN_MOOD, min(MAX_MOOD, int(round(number))))


class MoodEntry:
    def __init__(self, id: str = "", mood_level: int = NEUTRAL_MOOD, timestamp: Optional[str] = None,
                 notes: Optional[str] = None, tags: Optional[List[str]] = None, user_id: str = ""):
        self.id = id or uuid4().hex
        self.mood_level = mood_level
        self.timestamp = timestamp or now_iso()
        self.notes = notes
        self.tags = tags[:] if tags else []
        self.user_id = user_id

    @property
    def day(self):
        return local_day(self.timestamp)

    @property
    def label(self) -> str:
        return MOOD_LABELS.get(self.mood_level, "Unknown")

    def describe(self) -> str:
        return f"{MOOD_EMOJI.get(self.mood_level, '')} {self.label}".strip()

    def __str__(self) -> str:
        parts = [f"{self.timestamp} - {self.describe()}"]
        if self.notes:
            parts.append(self.notes)
        if self.tags:
            parts.append("Tags: " + ", ".join(self.tags))
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Builds a normalized MoodEntry; returns None for an unreadable timestamp.'''
        d = dict(data) if isinstance(data, dict) else {}
        if "mood_level" not in d and "mood" in d:
            d["mood_level"] = d["mood"]
        if "timestamp" not in d and "date" in d:
            d["timestamp"] = d["date"]
        ts_raw = d.get("timestamp")
        if ts_raw in (None, ""):
            timestamp = now_iso()
        else:
            dt = parse_timestamp(ts_raw)
            if dt is None:
                return None
            timestamp = dt.isoformat(timespec="seconds")
        notes = d.get("notes")
        notes = str(notes).strip() if notes not in (None, "") else None
        return MoodEntry(
            id=str(d.get("id") or ""),
            mood_level=normalize_mood_level(d.get("mood_level")),
            timestamp=timestamp,
            notes=notes or None,
            tags=to_tags(d.get("tags")),
            user_id=str(d.get("user_id") or ""),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "mood_level": self.mood_level,
            "timestamp": self.timestamp,
            "notes": self.notes,
            "tags": self.tags,
        }
