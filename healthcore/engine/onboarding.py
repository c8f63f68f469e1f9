"""Onboarding flow and profile completeness.

The wizard is a fixed sequence of named steps with total transitions; the
engine only needs `is_onboarded` to decide whether targets can be shown.
The lifestyle answers also feed a 0-100 holistic score.
"""

from __future__ import annotations

import math
from enum import Enum

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import BiometricProfile, WellnessAnswers


class OnboardingStep(str, Enum):
    identity = "identity"
    biometrics = "biometrics"
    training = "training"
    activity = "activity"
    lifestyle = "lifestyle"
    mindset = "mindset"
    diet = "diet"
    complete = "complete"


_ORDER: tuple[OnboardingStep, ...] = tuple(OnboardingStep)

# (field, min, max): inclusive bounds accepted by the onboarding form.
PROFILE_RANGES: tuple[tuple[str, float, float], ...] = (
    ("age", 13, 120),
    ("weight_kg", 20, 300),
    ("height_cm", 100, 250),
)


def next_step(step: OnboardingStep) -> OnboardingStep:
    """Following step; `complete` stays `complete`."""
    index = _ORDER.index(step)
    return _ORDER[min(index + 1, len(_ORDER) - 1)]


def previous_step(step: OnboardingStep) -> OnboardingStep:
    """Preceding step; the first step stays put."""
    index = _ORDER.index(step)
    return _ORDER[max(index - 1, 0)]


def _as_float(value) -> float | None:
    """Finite float, or None for anything that is not one."""
    if value is None:
        return None
    try:
        value = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _is_positive(value) -> bool:
    number = _as_float(value)
    return number is not None and number > 0


def missing_biometrics(profile: BiometricProfile) -> list[str]:
    return [name for name in ("age", "weight_kg", "height_cm") if not _is_positive(getattr(profile, name))]


def is_onboarded(profile: BiometricProfile | None) -> bool:
    """Age, weight and height all > 0."""
    return profile is not None and not missing_biometrics(profile)


def validate_profile(profile: BiometricProfile) -> list[str]:
    """Human-readable problems with entered biometrics; empty when fine."""
    problems: list[str] = []
    for name, low, high in PROFILE_RANGES:
        value = getattr(profile, name)
        number = _as_float(value)
        if value is None:
            problems.append(f"{name} is required")
        elif number is None or not low <= number <= high:
            problems.append(f"{name} must be between {low:g} and {high:g}")
    return problems


def holistic_score(answers: WellnessAnswers, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """0-100 lifestyle score derived from the questionnaire, starting at 50.

    Unanswered questions neither add nor subtract.
    """
    score = config.holistic_base
    sleep = _as_float(answers.sleep_hours)
    weekly = _as_float(answers.weekly_workout_time)
    stress = (answers.stress_level or "").strip().lower()
    experience = (answers.fitness_experience or "").strip().lower()

    low_sleep, high_sleep = config.holistic_good_sleep_hours
    if sleep is not None and low_sleep <= sleep <= high_sleep:
        score += config.holistic_sleep_bonus
    if stress in config.holistic_calm_stress_levels:
        score += config.holistic_calm_bonus
    if weekly is not None and weekly >= config.holistic_active_weekly_hours:
        score += config.holistic_active_bonus
    if experience and experience != config.holistic_beginner_level:
        score += config.holistic_experience_bonus

    if stress == config.holistic_high_stress_level:
        score -= config.holistic_high_stress_penalty
    if sleep is not None and sleep < config.holistic_short_sleep_hours:
        score -= config.holistic_short_sleep_penalty
    if weekly is not None and weekly < config.holistic_inactive_weekly_hours:
        score -= config.holistic_inactive_penalty

    return max(0, min(100, score))
