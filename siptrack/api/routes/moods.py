from datetime import datetime
from fastapi import APIRouter, HTTPException, Query

from siptrack.domain.MoodEntry import MoodEntry
from siptrack.events.event_helpers import publish_mood_removed, publish_mood_saved
from siptrack.infra import paths
from siptrack.infra.Mood_Repository import MoodRepository
from siptrack.utilities.config import DEFAULT_USER_ID
from siptrack.utilities.constants import COMMON_MOOD_TAGS, MOOD_EMOJI, MOOD_LABELS
from siptrack.utilities.validators import MoodEntryInput, MoodMigrationInput

router = APIRouter()


def mood_repository() -> MoodRepository:
    return MoodRepository(paths.MOODS_FILE)


@router.get("/api/moods")
def list_moods(user_id: str = Query(default=DEFAULT_USER_ID)):
    entries = mood_repository().list(user_id)
    return {"count": len(entries), "items": [e.to_dict() for e in entries]}


@router.get("/api/moods/options")
def mood_options():
    return {
        "levels": [{"level": k, "label": v, "emoji": MOOD_EMOJI[k]} for k, v in MOOD_LABELS.items()],
        "tags": COMMON_MOOD_TAGS,
    }


@router.get("/api/moods/today")
def todays_mood(user_id: str = Query(default=DEFAULT_USER_ID)):
    entry = mood_repository().for_day(user_id, datetime.now().astimezone().date())
    return {"logged": entry is not None, "entry": entry.to_dict() if entry else None}


@router.post("/api/moods", status_code=201)
def save_mood(payload: MoodEntryInput, user_id: str = Query(default=DEFAULT_USER_ID)):
    data = payload.model_dump()
    data["user_id"] = user_id
    entry = MoodEntry.from_dict(data)
    if entry is None:
        raise HTTPException(status_code=422, detail="Invalid timestamp")
    saved = mood_repository().upsert(entry)
    publish_mood_saved(saved)
    return saved.to_dict()


@router.post("/api/moods/migrate")
def migrate_moods(payload: MoodMigrationInput, user_id: str = Query(default=DEFAULT_USER_ID)):
    incoming = [e for e in (MoodEntry.from_dict(raw) for raw in payload.entries) if e is not None]
    added = mood_repository().migrate(user_id, incoming)
    return {"received": len(payload.entries), "migrated": added}


@router.delete("/api/moods/{entry_id}")
def delete_mood(entry_id: str, user_id: str = Query(default=DEFAULT_USER_ID)):
    repo = mood_repository()
    if not any(e.id == entry_id for e in repo.list(user_id)):
        raise HTTPException(status_code=404, detail="Mood entry not found")
    repo.remove(entry_id)
    publish_mood_removed(entry_id, user_id)
    return {"status": "deleted", "id": entry_id}
