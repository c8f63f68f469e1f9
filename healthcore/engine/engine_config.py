"""Static engine configuration — tables only, no logic.

Every constant the calculators use lives here in an immutable EngineConfig.
The module-level functions default to DEFAULT_ENGINE_CONFIG; MetricsEngine
takes an alternative instance at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen(table: dict) -> Mapping:
    return MappingProxyType(dict(table))


ACTIVITY_MULTIPLIERS = _frozen(
    {
        "sedentary": 1.2,
        "lightly_active": 1.375,
        "moderately_active": 1.55,
        "very_active": 1.725,
        "extremely_active": 1.9,
    }
)

GOAL_ADJUSTMENTS = _frozen(
    {
        "lose_weight": -500.0,
        "build_muscle": 300.0,
        "maintain": 0.0,
        "improve_endurance": 0.0,
        "general_health": 0.0,
    }
)

# kcal-relevant MET values (1 MET = resting energy expenditure)
MET_VALUES = _frozen(
    {
        # Cardio
        "walking_slow": 3.0,
        "walking_moderate": 3.5,
        "walking_brisk": 4.5,
        "jogging": 7.0,
        "running_6mph": 9.8,
        "running_8mph": 11.8,
        "cycling_light": 5.8,
        "cycling_moderate": 8.0,
        "cycling_vigorous": 10.0,
        "swimming_light": 5.8,
        "swimming_moderate": 9.8,
        "rowing_moderate": 7.0,
        # Strength
        "weight_lifting_light": 3.5,
        "weight_lifting_vigorous": 6.0,
        "bodyweight_exercises": 3.8,
        "circuit_training": 8.0,
        # HIIT
        "hiit_light": 8.0,
        "hiit_moderate": 10.0,
        "hiit_intense": 12.0,
        "burpees": 8.0,
        "jump_rope": 12.3,
        # Yoga & recovery
        "yoga_hatha": 2.5,
        "yoga_vinyasa": 4.0,
        "yoga_power": 5.0,
        "pilates": 3.0,
        "stretching": 2.3,
    }
)

# Ordered: first keyword found in the exercise name wins.
MET_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("run",), "running_6mph"),
    (("walk",), "walking_moderate"),
    (("cycle", "bike"), "cycling_moderate"),
    (("swim",), "swimming_moderate"),
    (("hiit",), "hiit_moderate"),
    (("yoga",), "yoga_vinyasa"),
    (("weight", "lift"), "weight_lifting_vigorous"),
)

# (last cycle day of the phase, phase name, description), ascending.
CYCLE_PHASES: tuple[tuple[int, str, str], ...] = (
    (5, "Menstrual", "Rest & Recharge"),
    (13, "Follicular", "Rising Energy"),
    (16, "Ovulation", "Peak Vitality"),
    (28, "Luteal", "Winding Down"),
)

# Indexed by completed gestational week.
BABY_SIZES: tuple[str, ...] = (
    "Poppy Seed",
    "Sesame Seed",
    "Lentil",
    "Blueberry",
    "Kidney Bean",
    "Grape",
    "Kumquat",
    "Fig",
    "Lime",
    "Lemon",
    "Apple",
    "Avocado",
    "Turnip",
    "Bell Pepper",
    "Cucumber",
    "Papaya",
    "Eggplant",
    "Squash",
    "Pineapple",
    "Cantaloupe",
    "Honeydew",
    "Watermelon",
    "Pumpkin",
)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    # Energy & macros
    activity_multipliers: Mapping[str, float] = field(default_factory=lambda: ACTIVITY_MULTIPLIERS)
    default_activity_level: str = "lightly_active"
    goal_adjustments: Mapping[str, float] = field(default_factory=lambda: GOAL_ADJUSTMENTS)
    male_constant: float = 5.0
    female_constant: float = -161.0
    default_weight_kg: float = 70.0
    default_height_cm: float = 170.0
    default_age: int = 30
    protein_high_protein: float = 2.5
    protein_build_muscle: float = 2.2
    protein_lose_weight: float = 2.0
    protein_default: float = 1.6
    fat_fraction_low_carb: float = 0.4
    fat_fraction_default: float = 0.3
    carb_floor_g: float = 50.0
    water_ml_per_kg: float = 30.0
    default_water_goal_ml: int = 2000

    # Activity
    default_met: float = 6.0
    min_met: float = 0.1
    kcal_per_step: float = 0.04
    default_calories_per_minute: float = 6.0
    strength_reference_load_kg: float = 50.0
    strength_max_multiplier: float = 2.0
    met_values: Mapping[str, float] = field(default_factory=lambda: MET_VALUES)
    met_keywords: tuple[tuple[tuple[str, ...], str], ...] = MET_KEYWORDS

    # Vitality (fixed product weights)
    default_step_goal: int = 10000
    steps_weight: float = 0.4
    mood_weight: float = 0.3
    fuel_weight: float = 0.3
    max_mood: int = 5

    # Metric streaks
    water_streak_oz: float = 64.0

    # Holistic onboarding score
    holistic_base: int = 50
    holistic_good_sleep_hours: tuple[float, float] = (7.0, 9.0)
    holistic_short_sleep_hours: float = 6.0
    holistic_calm_stress_levels: tuple[str, ...] = ("low", "moderate")
    holistic_high_stress_level: str = "very_high"
    holistic_active_weekly_hours: float = 3.0
    holistic_inactive_weekly_hours: float = 1.0
    holistic_beginner_level: str = "beginner"
    holistic_sleep_bonus: int = 10
    holistic_calm_bonus: int = 10
    holistic_active_bonus: int = 10
    holistic_experience_bonus: int = 5
    holistic_high_stress_penalty: int = 10
    holistic_short_sleep_penalty: int = 10
    holistic_inactive_penalty: int = 5

    # Cycle / pregnancy
    cycle_length_days: int = 28
    cycle_phases: tuple[tuple[int, str, str], ...] = CYCLE_PHASES
    baby_sizes: tuple[str, ...] = BABY_SIZES
    baby_size_fallback: str = "Melon"
    second_trimester_week: int = 14
    third_trimester_week: int = 28
    full_term_weeks: int = 40


DEFAULT_ENGINE_CONFIG = EngineConfig()
