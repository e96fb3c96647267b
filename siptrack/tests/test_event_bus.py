import unittest

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.MoodEntry import MoodEntry
from siptrack.events import web_observers
from siptrack.events.Event_Bus import DRINK_LOGGED, EventBus
from siptrack.events.event_helpers import publish_drink_logged, publish_mood_removed, publish_mood_saved


class TestEventBus(unittest.TestCase):

    def test_subscribe_publish_unsubscribe(self):
        bus = EventBus()
        seen = []

        def listener(name, payload):
            seen.append((name, payload))

        bus.subscribe(DRINK_LOGGED, listener)
        bus.subscribe(DRINK_LOGGED, listener)
        bus.publish(DRINK_LOGGED, {"x": 1})
        bus.unsubscribe(DRINK_LOGGED, listener)
        bus.publish(DRINK_LOGGED, {"x": 2})
        self.assertEqual(seen, [(DRINK_LOGGED, {"x": 1})])

    def test_failing_listener_does_not_stop_others(self):
        bus = EventBus()
        seen = []

        def broken(name, payload):
            raise RuntimeError("boom")

        bus.subscribe(DRINK_LOGGED, broken)
        bus.subscribe(DRINK_LOGGED, lambda name, payload: seen.append(payload))
        with self.assertLogs("siptrack.events.Event_Bus", level="ERROR"):
            bus.publish(DRINK_LOGGED, "p")
        self.assertEqual(seen, ["p"])


class TestActivityFeed(unittest.TestCase):

    def setUp(self):
        web_observers.start()
        self.cursor = web_observers.get_events()["next_cursor"]

    def test_events_are_summarized(self):
        drink = DrinkLog(name="Pils", brand="Local", quantity=2, user_id="feed-test")
        mood = MoodEntry(mood_level=5, user_id="feed-test")
        publish_drink_logged(drink)
        publish_mood_saved(mood)
        publish_mood_removed(mood.id, "feed-test")

        events = web_observers.get_events(self.cursor, "feed-test")["events"]
        self.assertEqual([e["type"] for e in events], ["drink.logged", "mood.saved", "mood.removed"])
        self.assertEqual(events[0]["summary"], "2x Local Pils")
        self.assertIn("Excellent", events[1]["summary"])
        self.assertEqual(events[2]["record_id"], mood.id)

    def test_buffer_is_bounded(self):
        for _ in range(web_observers.MAX_EVENTS + 10):
            publish_mood_removed("x", "flood")
        self.assertLessEqual(len(web_observers.get_events()["events"]), web_observers.MAX_EVENTS)


if __name__ == '__main__':
    unittest.main()
