import json
from datetime import date

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.MoodEntry import MoodEntry
from siptrack.domain.SavedDrink import SavedDrink
from siptrack.infra.Drink_Repository import DrinkRepository, load_drink_logs
from siptrack.infra.Mood_Repository import MoodRepository
from siptrack.infra.Saved_Drink_Repository import SavedDrinkRepository


def test_drink_append_list_remove(tmp_path):
    repo = DrinkRepository(tmp_path / "drinks.json")
    old = repo.append(DrinkLog(name="Old", user_id="u1", timestamp="2024-01-01T10:00:00"))
    new = repo.append(DrinkLog(name="New", user_id="u1", timestamp="2024-01-02T10:00:00"))
    repo.append(DrinkLog(name="Other", user_id="u2", timestamp="2024-01-03T10:00:00"))

    assert [d.name for d in repo.list("u1")] == ["New", "Old"]
    assert repo.get(old.id).name == "Old"
    assert repo.remove(new.id) is True
    assert repo.remove(new.id) is False
    assert [d.id for d in repo.list("u1")] == [old.id]


def test_missing_and_corrupt_files_read_as_empty(tmp_path):
    path = tmp_path / "drinks.json"
    assert DrinkRepository(path).list("u1") == []
    path.write_text("{not json", encoding="utf-8")
    assert load_drink_logs(path) == []


def test_rows_with_bad_timestamps_are_skipped(tmp_path):
    path = tmp_path / "drinks.json"
    path.write_text(json.dumps([
        {"name": "Good", "user_id": "u1", "timestamp": "2024-01-01T10:00:00"},
        {"name": "Bad", "user_id": "u1", "timestamp": "whenever"},
    ]), encoding="utf-8")
    assert [d.name for d in DrinkRepository(path).list("u1")] == ["Good"]


def test_mood_upsert_replaces_same_day(tmp_path):
    repo = MoodRepository(tmp_path / "moods.json")
    first = repo.upsert(MoodEntry(mood_level=2, timestamp="2024-01-01T08:00:00", user_id="u1"))
    second = repo.upsert(MoodEntry(mood_level=5, timestamp="2024-01-01T20:00:00", notes="better", user_id="u1"))
    repo.upsert(MoodEntry(mood_level=3, timestamp="2024-01-02T08:00:00", user_id="u1"))

    entries = repo.list("u1")
    assert len(entries) == 2
    assert second.id == first.id
    today = repo.for_day("u1", date(2024, 1, 1))
    assert today.mood_level == 5
    assert today.notes == "better"


def test_mood_upsert_is_per_user(tmp_path):
    repo = MoodRepository(tmp_path / "moods.json")
    repo.upsert(MoodEntry(mood_level=2, timestamp="2024-01-01T08:00:00", user_id="u1"))
    repo.upsert(MoodEntry(mood_level=4, timestamp="2024-01-01T08:00:00", user_id="u2"))
    assert len(repo.list("u1")) == 1
    assert len(repo.list("u2")) == 1


def test_mood_migrate_skips_taken_days(tmp_path):
    repo = MoodRepository(tmp_path / "moods.json")
    repo.upsert(MoodEntry(mood_level=4, timestamp="2024-01-01T08:00:00", user_id="u1"))
    incoming = [
        MoodEntry(mood_level=1, timestamp="2024-01-01T09:00:00"),
        MoodEntry(mood_level=2, timestamp="2024-01-02T09:00:00"),
        MoodEntry(mood_level=3, timestamp="2024-01-02T21:00:00"),
    ]
    assert repo.migrate("u1", incoming) == 1
    assert repo.for_day("u1", date(2024, 1, 1)).mood_level == 4
    assert repo.for_day("u1", date(2024, 1, 2)).mood_level == 2
    assert repo.migrate("u1", []) == 0


def test_mood_remove(tmp_path):
    repo = MoodRepository(tmp_path / "moods.json")
    entry = repo.append(MoodEntry(mood_level=3, user_id="u1"))
    assert repo.remove(entry.id)
    assert repo.list("u1") == []


def test_saved_drink_saved_twice_is_one_row(tmp_path):
    path = tmp_path / "saved.json"
    repo = SavedDrinkRepository(path)
    first = repo.save(SavedDrink(user_id="u1", name="IPA", brand="Hop Co", last_used_at="2024-01-01T10:00:00"))
    repo.save(SavedDrink(user_id="u1", name="Pils", brand="", last_used_at="2024-01-05T10:00:00"))
    again = repo.save(SavedDrink(user_id="u1", name="ipa", brand="HOP CO"))

    assert again.id == first.id
    assert len(json.loads(path.read_text(encoding="utf-8"))) == 2
    # touching the IPA makes it the most recently used
    assert [d.name for d in repo.list("u1")] == ["IPA", "Pils"]
    assert repo.find("u1", "IPA", "hop co").id == first.id
    assert repo.find("u2", "IPA", "Hop Co") is None


def test_writes_keep_rows_with_unreadable_timestamps(tmp_path):
    path = tmp_path / "drinks.json"
    stray = {"id": "old", "timestamp": "not-a-date", "user_id": "other"}
    path.write_text(json.dumps([stray]), encoding="utf-8")
    repo = DrinkRepository(path)

    added = repo.append(DrinkLog(name="Lager", user_id="u1"))
    assert repo.remove(added.id) is True
    assert json.loads(path.read_text(encoding="utf-8")) == [stray]


def test_mood_writes_keep_rows_with_unreadable_timestamps(tmp_path):
    path = tmp_path / "moods.json"
    stray = {"id": "old", "timestamp": "someday", "mood_level": 4, "user_id": "other"}
    path.write_text(json.dumps([stray]), encoding="utf-8")
    repo = MoodRepository(path)

    entry = repo.upsert(MoodEntry(mood_level=3, timestamp="2024-01-01T08:00:00", user_id="u1"))
    repo.migrate("u1", [MoodEntry(mood_level=2, timestamp="2024-01-02T08:00:00")])
    repo.remove(entry.id)

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stray in stored
    assert len(stored) == 2
