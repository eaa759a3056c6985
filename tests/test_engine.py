import random
import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path


SCRIPT_DIR = Path(__file__).resolve().parents[1]
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from crab_engine import messages
from crab_engine.engine import BODY_COLOR, CELEBRATION_COLOR, CrabEngine, RenderablePose
from crab_engine.mood import Mood
from crab_engine.records import ActivityRecord
from crab_engine.wellbeing import WellbeingState


NOW = datetime(2026, 1, 26, 15, 0, tzinfo=timezone.utc)  # Monday
BOUNDS = (80.0, 15.0)


def make_engine(happiness: int = 50, seed: int = 7) -> CrabEngine:
    wellbeing = WellbeingState(happiness=happiness, last_seen=NOW)
    return CrabEngine(wellbeing, rng=random.Random(seed), timezone_name="UTC")


class CrabEngineTests(unittest.TestCase):
    def test_activity_boosts_celebrates_and_counts(self) -> None:
        engine = make_engine(happiness=50)
        accepted = engine.on_activity("/src/kani", "abc123", NOW - timedelta(minutes=5), "kani", now=NOW)

        self.assertTrue(accepted)
        self.assertEqual(engine.happiness, 75)
        self.assertIs(engine.mood, Mood.HAPPY)
        self.assertTrue(engine.physics.celebrating)
        self.assertEqual(engine.wellbeing.total_activity_tracked, 1)
        self.assertEqual(engine.wellbeing.streak, 1)
        self.assertEqual(engine.wellbeing.best_streak, 1)
        self.assertIn(engine.message, messages.COMMIT_MESSAGES)

    def test_duplicate_activity_is_ignored(self) -> None:
        engine = make_engine(happiness=50)
        engine.on_activity("/src/kani", "abc123", NOW, now=NOW)
        engine.physics.celebrating = False

        self.assertFalse(engine.on_activity("/src/kani", "abc123", NOW, now=NOW))
        self.assertEqual(engine.happiness, 75)
        self.assertFalse(engine.physics.celebrating)
        self.assertEqual(engine.wellbeing.total_activity_tracked, 1)

    def test_boosts_saturate(self) -> None:
        engine = make_engine(happiness=95)
        for index in range(5):
            engine.on_activity("repo", f"c{index}", NOW, now=NOW)
        self.assertEqual(engine.happiness, 100)
        self.assertIs(engine.mood, Mood.ECSTATIC)

    def test_import_history_seeds_streak_without_boost(self) -> None:
        engine = make_engine(happiness=30)
        friday = ActivityRecord(timestamp=NOW - timedelta(days=3), activity_id="fri")
        thursday = ActivityRecord(timestamp=NOW - timedelta(days=4), activity_id="thu")
        self.assertEqual(engine.import_history([friday, thursday, friday], now=NOW), 2)
        self.assertEqual(engine.happiness, 30)
        self.assertFalse(engine.physics.celebrating)
        self.assertEqual(engine.wellbeing.streak, 2)
        self.assertEqual(engine.wellbeing.total_activity_tracked, 0)

    def test_feed_and_punish(self) -> None:
        engine = make_engine(happiness=50)
        engine.feed()
        self.assertEqual(engine.happiness, 55)
        self.assertTrue(engine.physics.celebrating)
        engine.punish()
        engine.punish()
        self.assertEqual(engine.happiness, 45)

    def test_tick_returns_renderable_pose(self) -> None:
        engine = make_engine(happiness=30)
        pose = engine.tick(0.05, BOUNDS)
        self.assertIsInstance(pose, RenderablePose)
        self.assertIn(pose.ascii_template_id, ("sad_left", "sad_right", "ecstatic_1", "ecstatic_2"))
        self.assertEqual(pose.position, engine.physics.position)
        self.assertEqual(len(pose.art.splitlines()), 4)

    def test_pose_color_tracks_mood_and_celebration(self) -> None:
        engine = make_engine(happiness=10)
        engine.tick(0.05, BOUNDS)
        self.assertEqual(engine.pose().color, BODY_COLOR[Mood.HUNGRY])
        engine.celebrate()
        self.assertEqual(engine.pose().color, CELEBRATION_COLOR)

    def test_mood_is_rederived_every_tick(self) -> None:
        engine = make_engine(happiness=45)
        engine.tick(0.05, BOUNDS)
        self.assertIs(engine.physics.mood, Mood.NEUTRAL)
        engine.wellbeing.decay(30)
        engine.tick(0.05, BOUNDS)
        self.assertIs(engine.physics.mood, Mood.HUNGRY)
        self.assertIn(engine.message, messages.MOOD_DOWN_MESSAGES)

        engine.wellbeing.boost(60)
        engine.tick(0.05, BOUNDS)
        self.assertIs(engine.physics.mood, Mood.HAPPY)
        self.assertIn(engine.message, messages.MOOD_UP_MESSAGES)

    def test_commit_line_is_not_replaced_by_mood_change(self) -> None:
        engine = make_engine(happiness=60)
        engine.on_activity("repo", "c1", NOW, now=NOW)
        engine.tick(0.05, BOUNDS)
        self.assertIn(engine.message, messages.COMMIT_MESSAGES)

    def test_frozen_movement_keeps_position(self) -> None:
        engine = make_engine(happiness=95)
        engine.set_movement_frozen(True)
        start = engine.physics.position
        for _ in range(50):
            engine.tick(0.05, BOUNDS)
        self.assertEqual(engine.physics.position, start)

    def test_idle_message_matches_mood(self) -> None:
        engine = make_engine(happiness=25)
        self.assertIn(engine.idle_message(), messages.MOOD_MESSAGES[Mood.SAD])

    def test_snapshot_round_trips(self) -> None:
        engine = make_engine(happiness=50)
        engine.on_activity("repo", "c1", NOW, now=NOW)
        restored = WellbeingState.from_snapshot(engine.snapshot())
        self.assertEqual(restored, engine.wellbeing)

    def test_physics_has_its_own_seeded_generator(self) -> None:
        engine = make_engine(seed=11)
        self.assertIsNot(engine.physics.rng, engine.rng)

        twin = make_engine(seed=11)
        for _ in range(40):
            first = engine.tick(0.05, BOUNDS)
            second = twin.tick(0.05, BOUNDS)
            self.assertEqual(first, second)
        self.assertEqual(engine.message, twin.message)


class MessageTests(unittest.TestCase):
    def test_mood_change_message_direction(self) -> None:
        rng = random.Random(1)
        self.assertIn(messages.mood_change_message(Mood.SAD, Mood.HAPPY, rng), messages.MOOD_UP_MESSAGES)
        self.assertIn(messages.mood_change_message(Mood.HAPPY, Mood.HUNGRY, rng), messages.MOOD_DOWN_MESSAGES)
        self.assertIsNone(messages.mood_change_message(Mood.NEUTRAL, Mood.NEUTRAL, rng))

    def test_every_mood_has_lines(self) -> None:
        rng = random.Random(2)
        for mood in Mood:
            self.assertIn(messages.mood_message(mood, rng), messages.MOOD_MESSAGES[mood])
        self.assertIn(messages.commit_message(rng), messages.COMMIT_MESSAGES)


if __name__ == "__main__":
    unittest.main()
