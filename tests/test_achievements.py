"""Tests for achievement evaluation and the default catalog."""

from __future__ import annotations

from datetime import date, timedelta

from healthcore.engine.achievements import (
    achievement,
    achievement_cards,
    capped_progress,
    consecutive_days,
    evaluate_achievements,
    metric_streak,
    metric_streaks,
)
from healthcore.engine.catalog import DEFAULT_CATALOG, get_definition, list_definitions
from healthcore.engine.models import DailyAggregate

from tests.conftest import NOW_MS, make_stats

TODAY = date(2026, 2, 15)


def _day(d: date, **fields) -> DailyAggregate:
    return DailyAggregate(day=d, **fields)


def _evaluate(stats, unlocked=()):
    return evaluate_achievements(DEFAULT_CATALOG, stats, unlocked, NOW_MS)


class TestDefaultCatalog:
    def test_ids(self):
        assert [d.id for d in list_definitions()] == [
            "first_workout",
            "step_goal",
            "calorie_burner",
            "workout_streak_3",
            "workout_warrior",
            "time_champion",
            "week_warrior",
            "variety_master",
        ]

    def test_lookup(self):
        assert get_definition("step_goal").icon == "locate"
        assert get_definition("nope") is None

    def test_streak_kind(self):
        assert get_definition("workout_streak_3").kind == "streak"


class TestEvaluate:
    def test_empty_day_unlocks_nothing(self):
        ev = _evaluate(make_stats(TODAY))
        assert ev.unlock_events == []
        assert ev.unlocked == frozenset()
        assert set(ev.progress) == {d.id for d in DEFAULT_CATALOG}
        assert all(p == 0 for p in ev.progress.values())

    def test_first_workout(self):
        stats = make_stats(TODAY, {TODAY: _day(TODAY, workout_count=1, workout_types=("strength",))})
        ev = _evaluate(stats)
        assert [e.achievement_id for e in ev.unlock_events] == ["first_workout"]
        assert ev.unlock_events[0].unlocked_at == NOW_MS
        assert "first_workout" in ev.unlocked
        assert "first_workout" not in ev.progress

    def test_already_unlocked_not_reemitted(self):
        stats = make_stats(TODAY, {TODAY: _day(TODAY, workout_count=1)})
        ev = _evaluate(stats, unlocked={"first_workout"})
        assert ev.unlock_events == []
        assert "first_workout" in ev.unlocked
        assert "first_workout" not in ev.progress

    def test_unlocked_set_is_monotonic(self):
        ev = _evaluate(make_stats(TODAY), unlocked={"variety_master", "legacy_badge"})
        assert {"variety_master", "legacy_badge"} <= ev.unlocked

    def test_step_progress(self):
        ev = _evaluate(make_stats(TODAY, {TODAY: _day(TODAY, steps=500)}))
        assert ev.progress["step_goal"] == 50

    def test_calorie_burner_threshold(self):
        ev = _evaluate(make_stats(TODAY, {TODAY: _day(TODAY, calories_burned_exercise=500)}))
        assert "calorie_burner" in ev.unlocked

    def test_three_day_streak(self):
        history = {TODAY - timedelta(days=i): _day(TODAY - timedelta(days=i), workout_count=1) for i in range(3)}
        ev = _evaluate(make_stats(TODAY, history))
        assert "workout_streak_3" in ev.unlocked

    def test_gap_breaks_streak(self):
        history = {
            TODAY: _day(TODAY, workout_count=1),
            TODAY - timedelta(days=1): _day(TODAY - timedelta(days=1)),
            TODAY - timedelta(days=2): _day(TODAY - timedelta(days=2), workout_count=1),
        }
        ev = _evaluate(make_stats(TODAY, history))
        assert "workout_streak_3" not in ev.unlocked
        # streaks never report partial progress
        assert ev.progress["workout_streak_3"] == 0

    def test_streak_needs_today(self):
        history = {
            TODAY - timedelta(days=i): _day(TODAY - timedelta(days=i), workout_count=1) for i in (1, 2, 3)
        }
        ev = _evaluate(make_stats(TODAY, history))
        assert "workout_streak_3" not in ev.unlocked

    def test_week_warrior_sums_history(self):
        history = {TODAY - timedelta(days=i): _day(TODAY - timedelta(days=i), workout_count=1) for i in range(0, 10, 2)}
        ev = _evaluate(make_stats(TODAY, history))
        assert "week_warrior" in ev.unlocked

    def test_variety_progress(self):
        stats = make_stats(TODAY, {TODAY: _day(TODAY, workout_count=2, workout_types=("yoga", "cardio"))})
        ev = _evaluate(stats)
        assert round(ev.progress["variety_master"]) == 67


class TestRobustness:
    def test_failing_predicate_does_not_unlock(self):
        broken = achievement("broken", "Broken", "Raises", "bug", predicate=lambda s: 1 / 0,
                             progress_fn=lambda s: s.totals.missing_field)
        ev = evaluate_achievements([broken], make_stats(TODAY), set(), NOW_MS)
        assert ev.unlock_events == []
        assert ev.progress == {"broken": 0.0}

    def test_duplicate_definition_unlocks_once(self):
        d = achievement("dup", "Dup", "Always", "star", predicate=lambda s: True)
        ev = evaluate_achievements([d, d], make_stats(TODAY), set(), NOW_MS)
        assert len(ev.unlock_events) == 1

    def test_progress_is_clamped(self):
        d = achievement("big", "Big", "Too much", "star", predicate=lambda s: False, progress_fn=lambda s: 250)
        ev = evaluate_achievements([d], make_stats(TODAY), set(), NOW_MS)
        assert ev.progress["big"] == 100


class TestHelpers:
    def test_capped_progress(self):
        assert capped_progress(5, 10) == 50
        assert capped_progress(20, 10) == 100
        assert capped_progress(1, 0) == 0

    def test_consecutive_days_stops_at_missing_day(self):
        history = {TODAY: _day(TODAY, workout_count=1)}
        assert consecutive_days(history, TODAY, lambda d: d.workout_count > 0) == 1
        assert consecutive_days({}, TODAY, lambda d: True) == 0


class TestMetricStreaks:
    @staticmethod
    def _run(days, **fields):
        return {TODAY - timedelta(days=i): _day(TODAY - timedelta(days=i), **fields) for i in days}

    def test_counts_from_today(self):
        history = self._run(range(3), workout_count=1)
        assert metric_streak(history, TODAY, lambda d: d.workout_count > 0) == 3

    def test_unlogged_today_keeps_yesterdays_run(self):
        history = self._run((1, 2), workout_count=1)
        assert metric_streak(history, TODAY, lambda d: d.workout_count > 0) == 2
        assert consecutive_days(history, TODAY, lambda d: d.workout_count > 0) == 0

    def test_two_day_gap_resets(self):
        history = self._run((2, 3), workout_count=1)
        assert metric_streak(history, TODAY, lambda d: d.workout_count > 0) == 0

    def test_summary(self):
        history = {
            TODAY: _day(TODAY, water_ml=2000, calories_burned_exercise=300, mood_rating=4),
            TODAY - timedelta(days=1): _day(TODAY - timedelta(days=1), water_ml=2000, mood_rating=3),
            TODAY - timedelta(days=2): _day(TODAY - timedelta(days=2), water_ml=1500, mood_rating=5),
        }
        streaks = metric_streaks(make_stats(TODAY, history))
        assert streaks.workout == 1
        assert streaks.water == 2
        assert streaks.mood == 3

    def test_water_below_64_oz_does_not_count(self):
        history = self._run(range(2), water_ml=1850)
        assert metric_streaks(make_stats(TODAY, history)).water == 0

    def test_empty_history(self):
        streaks = metric_streaks(make_stats(TODAY))
        assert (streaks.workout, streaks.water, streaks.mood) == (0, 0, 0)


class TestCards:
    def test_unlocked_cards_show_full_progress(self):
        stats = make_stats(TODAY, {TODAY: _day(TODAY, steps=500)})
        ev = _evaluate(stats, unlocked={"first_workout"})
        cards = {c.id: c for c in achievement_cards(DEFAULT_CATALOG, ev)}
        assert len(cards) == 8
        assert cards["first_workout"].unlocked is True
        assert cards["first_workout"].progress == 100
        assert cards["step_goal"].unlocked is False
        assert cards["step_goal"].progress == 50

    def test_localized_titles(self):
        d = achievement(
            "hola", {"en": "Hello", "es": "Hola"}, "Greeting", "star", predicate=lambda s: False
        )
        ev = evaluate_achievements([d], make_stats(TODAY), set(), NOW_MS)
        assert achievement_cards([d], ev, "es")[0].title == "Hola"
        assert achievement_cards([d], ev, "fr")[0].title == "Hello"
