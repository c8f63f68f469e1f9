"""Default achievement catalog — configuration only.

Stats come from a StatsBundle: `totals` is today's aggregate, `history`
holds the last few days keyed by date (today included).
"""

from __future__ import annotations

from healthcore.engine.achievements import (
    AchievementDefinition,
    achievement,
    capped_progress,
    consecutive_days,
)
from healthcore.engine.models import StatsBundle

STREAK_DAYS = 3


def _week_workouts(stats: StatsBundle) -> int:
    return sum(day.workout_count for day in stats.history.values())


def _variety(stats: StatsBundle) -> int:
    return len(set(stats.totals.workout_types))


def _workout_streak(stats: StatsBundle) -> int:
    return consecutive_days(stats.history, stats.today, lambda d: d.workout_count > 0)


DEFAULT_CATALOG: tuple[AchievementDefinition, ...] = (
    achievement(
        "first_workout",
        "First Steps",
        "Complete your first workout!",
        "star",
        predicate=lambda s: s.totals.workout_count >= 1,
        progress_fn=lambda s: capped_progress(s.totals.workout_count, 1),
    ),
    achievement(
        "step_goal",
        "Step Master",
        "Reach 1000+ steps in a day!",
        "locate",
        predicate=lambda s: s.totals.steps >= 1000,
        progress_fn=lambda s: capped_progress(s.totals.steps, 1000),
    ),
    achievement(
        "calorie_burner",
        "Calorie Crusher",
        "Burn 500+ calories in a day!",
        "flash",
        predicate=lambda s: s.totals.calories_burned_exercise >= 500,
        progress_fn=lambda s: capped_progress(s.totals.calories_burned_exercise, 500),
    ),
    achievement(
        "workout_streak_3",
        "3-Day Streak",
        "Workout for 3 consecutive days!",
        "trending-up",
        predicate=lambda s: _workout_streak(s) >= STREAK_DAYS,
        kind="streak",
    ),
    achievement(
        "workout_warrior",
        "Workout Warrior",
        "Complete 5 workouts in a single day!",
        "barbell",
        predicate=lambda s: s.totals.workout_count >= 5,
        progress_fn=lambda s: capped_progress(s.totals.workout_count, 5),
    ),
    achievement(
        "time_champion",
        "Time Champion",
        "Exercise for 60+ minutes in a day!",
        "time",
        predicate=lambda s: s.totals.minutes_exercised >= 60,
        progress_fn=lambda s: capped_progress(s.totals.minutes_exercised, 60),
    ),
    achievement(
        "week_warrior",
        "Week Warrior",
        "Workout 5+ times this week!",
        "trophy",
        predicate=lambda s: _week_workouts(s) >= 5,
        progress_fn=lambda s: capped_progress(_week_workouts(s), 5),
    ),
    achievement(
        "variety_master",
        "Variety Master",
        "Try 3 different workout types!",
        "fitness",
        predicate=lambda s: _variety(s) >= 3,
        progress_fn=lambda s: capped_progress(_variety(s), 3),
    ),
)


def get_definition(achievement_id: str) -> AchievementDefinition | None:
    return next((d for d in DEFAULT_CATALOG if d.id == achievement_id), None)


def list_definitions() -> list[AchievementDefinition]:
    return list(DEFAULT_CATALOG)
