"""Reduce raw log rows into DailyAggregate values and a StatsBundle.

Rows are plain dicts as returned by the store:
    {"date": date, "kind": "food" | "exercise" | "steps" | "water" | "mood",
     "payload": {...}}

Unknown kinds and malformed payload values are skipped; never raises.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Any, Iterable

from healthcore.engine import activity
from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import DailyAggregate, StatsBundle


def _num(payload: dict, key: str) -> float | None:
    raw = payload.get(key)
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (OverflowError, TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def build_daily_aggregate(
    day: date,
    rows: Iterable[dict[str, Any]],
    weight_kg: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DailyAggregate:
    """Sum one day's rows. Rows for other dates are ignored."""
    calories_eaten = 0.0
    burned_exercise = 0.0
    burned_steps = 0.0
    steps = 0
    water = 0.0
    mood: int | None = None
    minutes = 0.0
    workouts = 0
    types: list[str] = []

    for row in rows:
        if row.get("date") != day:
            continue
        payload = row.get("payload") or {}
        if not isinstance(payload, dict):
            continue
        kind = row.get("kind")

        if kind == "food":
            calories_eaten += max(0.0, _num(payload, "calories") or 0.0)
        elif kind == "exercise":
            duration = max(0.0, _num(payload, "duration") or 0.0)
            logged = _num(payload, "calories_burned")
            if logged is None:
                logged = activity.calories_burned(_num(payload, "met"), weight_kg, duration, config)
            burned_exercise += max(0.0, logged)
            minutes += duration
            workouts += 1
            exercise_type = payload.get("exercise_type")
            if exercise_type and exercise_type not in types:
                types.append(str(exercise_type))
        elif kind == "steps":
            count = max(0, int(_num(payload, "steps") or 0))
            steps += count
            logged = _num(payload, "calories_burned")
            burned_steps += max(0.0, logged) if logged is not None else activity.step_calories(count, config)
        elif kind == "water":
            water += max(0.0, _num(payload, "amount_ml") or 0.0)
        elif kind == "mood":
            rating = _num(payload, "mood")
            if rating is not None and rating > 0:
                # Latest entry of the day wins.
                mood = int(round(rating))

    return DailyAggregate(
        day=day,
        calories_eaten=calories_eaten,
        calories_burned_exercise=burned_exercise,
        calories_burned_steps=burned_steps,
        steps=steps,
        water_ml=water,
        mood_rating=mood,
        minutes_exercised=minutes,
        workout_count=workouts,
        workout_types=tuple(types),
    )


def build_stats_bundle(
    today: date,
    rows: list[dict[str, Any]],
    history_days: int = 7,
    weight_kg: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> StatsBundle:
    """Aggregate the `history_days` days ending at `today` (inclusive)."""
    span = max(1, history_days)
    history: dict[date, DailyAggregate] = {}
    for offset in range(span):
        day = today - timedelta(days=offset)
        history[day] = build_daily_aggregate(day, rows, weight_kg, config)
    return StatsBundle(today=today, totals=history[today], history=history)
