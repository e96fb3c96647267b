import unittest
from datetime import datetime

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.MoodEntry import MoodEntry
from siptrack.logic.reporting.dashboard import build_dashboard, todays_mood


class TestDashboard(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2024, 1, 15, 12, 0)
        self.drinks = [
            DrinkLog(name="IPA", brand="Brew", unit_price=7, quantity=2, calories=200,
                     carbs_g=15, sugar_g=1, timestamp="2024-01-14T20:00:00"),
            DrinkLog(name="IPA", brand="Brew", unit_price=7, quantity=1, calories=200,
                     carbs_g=15, sugar_g=1, timestamp="2024-01-04T20:00:00"),
        ]
        self.moods = [
            MoodEntry(mood_level=2, timestamp="2024-01-14T09:00:00"),
            MoodEntry(mood_level=4, timestamp="2024-01-15T09:00:00"),
        ]

    def test_totals(self):
        dash = build_dashboard(self.drinks, self.moods, now=self.now)
        self.assertEqual(dash["totals"], {"drinks": 3, "spent": 21.0, "calories": 600, "weight_gain_lbs": 0.17})

    def test_trend_polarity(self):
        dash = build_dashboard(self.drinks, self.moods, now=self.now)
        self.assertEqual(dash["trends"]["drinks"]["direction"], "up")
        self.assertFalse(dash["trends"]["drinks"]["favorable"])
        self.assertEqual(dash["trends"]["mood"]["direction"], "up")
        self.assertTrue(dash["trends"]["mood"]["favorable"])

    def test_custom_polarity(self):
        polarity = {"drinks": "higher_is_better"}
        dash = build_dashboard(self.drinks, self.moods, now=self.now, polarity=polarity)
        self.assertTrue(dash["trends"]["drinks"]["favorable"])
        # metrics missing from the mapping fall back to lower_is_better
        self.assertFalse(dash["trends"]["mood"]["favorable"])

    def test_mood_summary_and_correlation(self):
        dash = build_dashboard(self.drinks, self.moods, now=self.now)
        self.assertEqual(dash["mood"]["entries"], 2)
        self.assertEqual(dash["mood"]["average"], 3.0)
        self.assertEqual(dash["mood"]["today"]["mood_level"], 4)
        self.assertEqual(dash["correlation"]["days_analyzed"], 2)
        self.assertEqual(dash["correlation"]["correlation_strength"], -2)

    def test_empty_dashboard(self):
        dash = build_dashboard([], [], now=self.now)
        self.assertFalse(dash["has_drinks"])
        self.assertIsNone(dash["mood"]["average"])
        self.assertIsNone(dash["mood"]["today"])
        self.assertEqual(dash["charts"], {"spending": [], "health": [], "mood": []})
        self.assertEqual(dash["correlation"]["days_analyzed"], 0)

    def test_monthly_period(self):
        dash = build_dashboard(self.drinks, self.moods, now=self.now, period="monthly")
        self.assertEqual([p["key"] for p in dash["charts"]["spending"]], ["2024-01"])

    def test_todays_mood_picks_latest(self):
        moods = [
            {"timestamp": "2024-01-15T08:00:00", "mood_level": 2},
            {"timestamp": "2024-01-15T18:00:00", "mood_level": 5},
            {"timestamp": "2024-01-14T23:00:00", "mood_level": 1},
        ]
        today = todays_mood(moods, datetime(2024, 1, 15, 20, 0).astimezone())
        self.assertEqual(today["mood_level"], 5)


if __name__ == '__main__':
    unittest.main()
