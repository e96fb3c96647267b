import unittest
from datetime import date

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.MoodEntry import MoodEntry, normalize_mood_level
from siptrack.domain.SavedDrink import SavedDrink


class TestDrinkLog(unittest.TestCase):

    def test_from_dict_accepts_short_names(self):
        log = DrinkLog.from_dict({
            "name": "Lager", "price": "4.5", "abv": 5, "volume": 330,
            "carbs": 12, "sugar": 0, "date": "2024-01-01T20:00:00", "quantity": "2",
        })
        self.assertEqual(log.unit_price, 4.5)
        self.assertEqual(log.abv_percent, 5)
        self.assertEqual(log.volume_ml, 330)
        self.assertEqual(log.carbs_g, 12)
        self.assertEqual(log.quantity, 2)
        self.assertEqual(log.total_price, 9.0)
        self.assertTrue(log.timestamp.startswith("2024-01-01T20:00:00"))

    def test_from_dict_coerces_garbage(self):
        log = DrinkLog.from_dict({"name": "X", "calories": "lots", "unit_price": -3,
                                  "quantity": 0, "carbs_g": float("inf")})
        self.assertEqual(log.calories, 0)
        self.assertEqual(log.unit_price, 0)
        self.assertEqual(log.carbs_g, 0)
        self.assertEqual(log.quantity, 1)
        self.assertTrue(log.id)
        self.assertTrue(log.timestamp)

    def test_unreadable_timestamp(self):
        self.assertIsNone(DrinkLog.from_dict({"name": "X", "timestamp": "yesterday-ish"}))

    def test_to_dict_round_trip_keeps_id(self):
        log = DrinkLog(name="Stout", unit_price=6, timestamp="2024-02-02T18:00:00+00:00")
        again = DrinkLog.from_dict(log.to_dict())
        self.assertEqual(again.id, log.id)
        self.assertEqual(again.name, "Stout")


class TestMoodEntry(unittest.TestCase):

    def test_normalize_mood_level(self):
        self.assertEqual(normalize_mood_level(9), 5)
        self.assertEqual(normalize_mood_level(-2), 1)
        self.assertEqual(normalize_mood_level("4"), 4)
        self.assertEqual(normalize_mood_level("meh"), 3)
        self.assertEqual(normalize_mood_level(None), 3)

    def test_from_dict(self):
        entry = MoodEntry.from_dict({"mood": 7, "date": "2024-03-10T09:00:00",
                                     "notes": "  ", "tags": "work, tired,"})
        self.assertEqual(entry.mood_level, 5)
        self.assertIsNone(entry.notes)
        self.assertEqual(entry.tags, ["work", "tired"])
        self.assertEqual(entry.day, date(2024, 3, 10))
        self.assertEqual(entry.label, "Excellent")

    def test_unreadable_timestamp(self):
        self.assertIsNone(MoodEntry.from_dict({"mood_level": 3, "timestamp": "not a date"}))


class TestSavedDrink(unittest.TestCase):

    def test_matches_ignores_case(self):
        saved = SavedDrink(user_id="u1", brand="Guinness", name="Draught")
        self.assertTrue(saved.matches("u1", " draught ", "GUINNESS"))
        self.assertFalse(saved.matches("u2", "Draught", "Guinness"))
        self.assertFalse(saved.matches("u1", "Draught", ""))

    def test_from_drink(self):
        log = DrinkLog(name="Cider", brand="Orchard", calories=210, unit_price=5, user_id="u1")
        saved = SavedDrink.from_drink(log)
        self.assertEqual((saved.name, saved.brand, saved.calories, saved.unit_price), ("Cider", "Orchard", 210, 5))
        self.assertEqual(saved.last_used_at, saved.created_at)


if __name__ == '__main__':
    unittest.main()
