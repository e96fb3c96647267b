"""Mood entry repository (JSON file persistence, one current entry per user and day)."""
import logging
from typing import Iterable, List, Optional, Tuple

from siptrack.domain.MoodEntry import MoodEntry
from siptrack.infra.json_store import atomic_write, read_json_list
from siptrack.infra.paths import MOODS_FILE
from siptrack.utilities.coercion import parse_timestamp

logger = logging.getLogger(__name__)


def _read_rows(path) -> Tuple[List[MoodEntry], List[dict]]:
    entries, unreadable = [], []
    for raw in read_json_list(path):
        entry = MoodEntry.from_dict(raw)
        if entry is None:
            logger.warning(f"Skipping mood entry with unreadable timestamp: {raw!r}")
            unreadable.append(raw)
            continue
        entries.append(entry)
    return entries, unreadable


def load_mood_entries(path=MOODS_FILE) -> List[MoodEntry]:
    return _read_rows(path)[0]


class MoodRepository:
    def __init__(self, path=MOODS_FILE):
        self.path = path

    def _save(self, entries: List[MoodEntry], unreadable: List[dict]) -> None:
        # rows we cannot parse are written back untouched
        atomic_write(self.path, [e.to_dict() for e in entries] + unreadable)

    def list(self, user_id: str) -> List[MoodEntry]:
        """Entries of one user, newest first."""
        entries = [e for e in load_mood_entries(self.path) if e.user_id == user_id]
        entries.sort(key=lambda e: parse_timestamp(e.timestamp), reverse=True)
        return entries

    def for_day(self, user_id: str, day) -> Optional[MoodEntry]:
        for entry in self.list(user_id):
            if entry.day == day:
                return entry
        return None

    def append(self, entry: MoodEntry) -> MoodEntry:
        """Store an entry as-is, without the same-day check."""
        entries, unreadable = _read_rows(self.path)
        entries.append(entry)
        self._save(entries, unreadable)
        return entry

    def upsert(self, entry: MoodEntry) -> MoodEntry:
        """Save the user's mood for the entry's day, replacing that day's entry if one exists.

        The replaced entry keeps its id; mood, notes, tags and timestamp are taken
        from the new entry.
        """
        entries, unreadable = _read_rows(self.path)
        day = entry.day
        for i, existing in enumerate(entries):
            if existing.user_id == entry.user_id and existing.day == day:
                entries[i] = MoodEntry(
                    id=existing.id, mood_level=entry.mood_level, timestamp=entry.timestamp,
                    notes=entry.notes, tags=entry.tags, user_id=entry.user_id,
                )
                self._save(entries, unreadable)
                logger.info(f"Updated mood for {day} (user {entry.user_id})")
                return entries[i]
        entries.append(entry)
        self._save(entries, unreadable)
        logger.info(f"Logged mood for {day} (user {entry.user_id})")
        return entry

    def remove(self, entry_id: str) -> bool:
        entries, unreadable = _read_rows(self.path)
        kept = [e for e in entries if e.id != entry_id]
        if len(kept) == len(entries):
            return False
        self._save(kept, unreadable)
        logger.info(f"Removed mood entry {entry_id}")
        return True

    def migrate(self, user_id: str, incoming: Iterable[MoodEntry]) -> int:
        """Import entries for days that have no entry yet; returns how many were added."""
        entries, unreadable = _read_rows(self.path)
        taken_days = {e.day for e in entries if e.user_id == user_id}
        added = 0
        for entry in incoming:
            if entry.day in taken_days:
                continue
            entry.user_id = user_id
            entries.append(entry)
            taken_days.add(entry.day)
            added += 1
        if added:
            self._save(entries, unreadable)
            logger.info(f"Migrated {added} mood entries for user {user_id}")
        return added
