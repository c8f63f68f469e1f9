"""Activity calorie estimation.

Forward:  kcal = MET * weight_kg * hours
Reverse:  MET  = kcal / (max(1, weight_kg) * max(0.01, hours))

The reverse direction keeps the stored MET consistent with a calorie figure
the user typed in. A stored MET is always finite and >= config.min_met, and
every calorie figure is a finite whole number.
"""

from __future__ import annotations

import math

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import ExerciseLibraryEntry, ExerciseLogCandidate, ResolvedExercise


def _finite_non_negative(value: float | None) -> float:
    if value is None:
        return 0.0
    try:
        value = float(value)
    except (OverflowError, TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) and value > 0 else 0.0


def _usable_met(met: float | None) -> float | None:
    value = _finite_non_negative(met)
    return value if value > 0 else None


def _whole(value: float) -> int:
    """Round to int; an overflowed product counts as 0."""
    return max(0, round(value)) if math.isfinite(value) else 0


def _weight(weight_kg: float | None, config: EngineConfig) -> float:
    """Default only when the weight is unknown; a logged 0 stays 0."""
    if weight_kg is None:
        return config.default_weight_kg
    return _finite_non_negative(weight_kg)


def calories_burned(
    met: float | None,
    weight_kg: float | None,
    duration_minutes: float,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> int:
    """Whole kcal for a bout of exercise. Missing MET falls back to the library default."""
    weight = _finite_non_negative(weight_kg)
    hours = _finite_non_negative(duration_minutes) / 60.0
    kcal = (_usable_met(met) or config.default_met) * weight * hours
    if not math.isfinite(kcal):
        kcal = config.default_met * weight * hours
    return _whole(kcal)


def implied_met(
    target_calories: float,
    weight_kg: float | None,
    duration_minutes: float,
    fallback_met: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """MET that reproduces `target_calories` for this weight and duration."""
    hours = _finite_non_negative(duration_minutes) / 60.0
    weight = _finite_non_negative(weight_kg)
    try:
        met = float(target_calories) / (max(1.0, weight) * max(0.01, hours))
    except (OverflowError, TypeError, ValueError):
        met = math.nan
    if not math.isfinite(met):
        met = fallback_met if fallback_met is not None else config.default_met
    return max(config.min_met, met)


def met_from_calories_per_minute(
    calories_per_minute: float | None,
    weight_kg: float | None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """Library MET for entries that only publish kcal/min."""
    cpm = _finite_non_negative(calories_per_minute)
    if not cpm:
        return config.default_met
    met = cpm * 60.0 / max(1.0, _weight(weight_kg, config))
    return max(config.min_met, met) if math.isfinite(met) else config.default_met


def library_met(
    entry: ExerciseLibraryEntry,
    weight_kg: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """MET for a library entry: its own MET, else derived from kcal/min, else the default."""
    met = _usable_met(entry.met)
    if met is not None:
        return max(config.min_met, met)
    return met_from_calories_per_minute(entry.calories_per_minute, weight_kg, config)


def step_calories(steps: float, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Flat per-step heuristic, used when steps have no MET-based entry."""
    return _whole(_finite_non_negative(steps) * config.kcal_per_step)


def suggested_met(exercise_name: str, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    """Guess a MET from an exercise name, moderate intensity when nothing matches."""
    name = (exercise_name or "").lower()
    for keywords, key in config.met_keywords:
        if any(k in name for k in keywords):
            return config.met_values.get(key, config.default_met)
    return config.default_met


def pace_min_per_km(distance_km: float, duration_minutes: float) -> float:
    """Minutes per km to one decimal; 0 when no distance was covered."""
    distance = _finite_non_negative(distance_km)
    if not distance:
        return 0.0
    pace = _finite_non_negative(duration_minutes) / distance
    return round(pace, 1) if math.isfinite(pace) else 0.0


def library_calories(
    entry: ExerciseLibraryEntry,
    duration_minutes: float,
    sets: int | None = None,
    reps: int | None = None,
    load_kg: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> int:
    """Calorie estimate for a library exercise before the user overrides it.

    Strength work with sets, reps and a load scales by load / 50 kg, capped at 2x.
    """
    cpm = _finite_non_negative(entry.calories_per_minute) or config.default_calories_per_minute
    base = cpm * _finite_non_negative(duration_minutes)
    load = _finite_non_negative(load_kg)
    if entry.exercise_type == "strength" and sets and reps and load:
        base *= min(load / config.strength_reference_load_kg, config.strength_max_multiplier)
    return _whole(base)


def resolve_exercise(
    candidate: ExerciseLogCandidate,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ResolvedExercise:
    """Pick the MET to store and the calories that MET implies.

    Precedence: explicit target calories, explicit MET, kcal/min from the
    library entry, library default.
    """
    weight = _weight(candidate.weight_kg, config)
    hours = _finite_non_negative(candidate.duration_minutes) / 60.0
    fallback = met_from_calories_per_minute(candidate.calories_per_minute, weight, config)

    if candidate.target_calories is not None:
        met = implied_met(candidate.target_calories, weight, candidate.duration_minutes, fallback, config)
        # Floors keep the denominator positive; only a non-finite target falls back.
        source = "derived" if math.isfinite(candidate.target_calories) else "fallback"
    elif _usable_met(candidate.met) is not None:
        met = max(config.min_met, float(candidate.met))
        source = "explicit"
    elif _finite_non_negative(candidate.calories_per_minute):
        met = fallback
        source = "fallback"
    else:
        met = config.default_met
        source = "default"

    if not math.isfinite(met * weight * hours):
        met, source = fallback, "fallback"

    return ResolvedExercise(
        met=met,
        calories_burned=calories_burned(met, weight, candidate.duration_minutes, config),
        met_source=source,
    )


def resolve_library_exercise(
    entry: ExerciseLibraryEntry,
    duration_minutes: float,
    weight_kg: float | None = None,
    target_calories: float | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> ResolvedExercise:
    """Resolve a workout picked from the exercise library."""
    return resolve_exercise(
        ExerciseLogCandidate(
            duration_minutes=duration_minutes,
            weight_kg=weight_kg,
            met=entry.met,
            target_calories=target_calories,
            calories_per_minute=entry.calories_per_minute,
        ),
        config,
    )
