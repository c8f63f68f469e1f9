"""Composite daily vitality score (0-100).

    steps 40% + mood 30% + fuel 30%
    fuel = average of calorie-goal and water-goal adherence, each capped at 100%

The weights are a fixed product decision, not a per-user setting. A day with
no steps, no food and no mood entry has no score at all (None), which is
different from a score of 0.
"""

from __future__ import annotations

import math

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import VitalityBreakdown, VitalityInputs


def _ratio(value: float, goal: float) -> float:
    """value / max(1, goal), clamped to [0, 1]."""
    try:
        r = float(value) / max(1.0, float(goal))
    except (OverflowError, TypeError, ValueError):
        return 0.0
    if not math.isfinite(r):
        return 0.0
    return min(max(r, 0.0), 1.0)


def has_mood(mood_rating: int | None) -> bool:
    return bool(mood_rating) and mood_rating > 0


def is_no_data(inputs: VitalityInputs) -> bool:
    """True only when all three inputs are missing; any one is enough for a score."""
    return inputs.steps <= 0 and inputs.calories_eaten <= 0 and not has_mood(inputs.mood_rating)


def vitality_breakdown(
    inputs: VitalityInputs,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> VitalityBreakdown:
    steps_score = _ratio(inputs.steps, inputs.step_goal) * 100.0
    mood = min(max(inputs.mood_rating or 0, 0), config.max_mood)
    mood_score = (mood / config.max_mood) * 100.0
    cal_score = _ratio(inputs.calories_eaten, inputs.calorie_goal)
    water_score = _ratio(inputs.water_volume, inputs.water_goal)
    fuel_score = ((cal_score + water_score) / 2.0) * 100.0

    if is_no_data(inputs):
        return VitalityBreakdown(
            score=None,
            no_data=True,
            steps_score=steps_score,
            mood_score=mood_score,
            fuel_score=fuel_score,
        )

    score = round(
        steps_score * config.steps_weight
        + mood_score * config.mood_weight
        + fuel_score * config.fuel_weight
    )
    return VitalityBreakdown(
        score=min(max(score, 0), 100),
        no_data=False,
        steps_score=steps_score,
        mood_score=mood_score,
        fuel_score=fuel_score,
    )


def vitality_score(inputs: VitalityInputs, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int | None:
    """Score 0-100, or None when the day has no data."""
    return vitality_breakdown(inputs, config).score
