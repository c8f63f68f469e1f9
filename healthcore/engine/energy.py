"""Energy & macro targets — pure functions, never raises.

BMR uses Mifflin-St Jeor:
    10 * weight_kg + 6.25 * height_cm - 5 * age + s   (s = +5 male, -161 otherwise)
TDEE = BMR * activity multiplier; daily calories = TDEE + goal adjustment.

Missing inputs (None, non-finite, <= 0) are replaced by documented defaults
and reported in `EnergyTargets.defaults_used`; the caller decides whether to
warn the user.
"""

from __future__ import annotations

import math

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import (
    BiometricProfile,
    EnergyTargets,
    FitnessGoal,
    NutritionApproach,
    Sex,
)

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def _positive(value: float | None) -> float | None:
    if value is None:
        return None
    try:
        value = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _norm(value: str | None) -> str:
    return str(value).strip().lower() if value is not None else ""


def bmr_mifflin_st_jeor(
    weight_kg: float,
    height_cm: float,
    age: float,
    sex: str | None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """Basal metabolic rate in kcal/day. Anything but "male" uses the female constant."""
    constant = config.male_constant if _norm(sex) == Sex.male.value else config.female_constant
    return 10.0 * weight_kg + 6.25 * height_cm - 5.0 * age + constant


def activity_multiplier(activity_level: str | None, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    multipliers = config.activity_multipliers
    return multipliers.get(_norm(activity_level), multipliers[config.default_activity_level])


def goal_adjustment(fitness_goal: str | None, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    return config.goal_adjustments.get(_norm(fitness_goal), 0.0)


def protein_factor(
    fitness_goal: str | None,
    nutrition_approach: str | None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    """Grams of protein per kg. The nutrition approach is checked before the goal."""
    if _norm(nutrition_approach) == NutritionApproach.high_protein.value:
        return config.protein_high_protein
    goal = _norm(fitness_goal)
    if goal == FitnessGoal.build_muscle.value:
        return config.protein_build_muscle
    if goal == FitnessGoal.lose_weight.value:
        return config.protein_lose_weight
    return config.protein_default


def fat_fraction(nutrition_approach: str | None, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    if _norm(nutrition_approach) == NutritionApproach.low_carb.value:
        return config.fat_fraction_low_carb
    return config.fat_fraction_default


def unknown_enum_fields(profile: BiometricProfile, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> list[str]:
    """Names of enum fields whose value is set but not recognised."""
    checks = (
        ("sex", profile.sex, {s.value for s in Sex}),
        ("activity_level", profile.activity_level, set(config.activity_multipliers)),
        ("fitness_goal", profile.fitness_goal, set(config.goal_adjustments)),
        ("nutrition_approach", profile.nutrition_approach, {a.value for a in NutritionApproach}),
    )
    return [name for name, value, known in checks if value is not None and _norm(value) not in known]


def _raw_targets(
    weight: float,
    height: float,
    age: float,
    profile: BiometricProfile,
    config: EngineConfig,
) -> tuple[float, float, float, float, float, float]:
    """Unrounded (bmr, tdee, calories, protein, fat, carbs)."""
    bmr = bmr_mifflin_st_jeor(weight, height, age, profile.sex, config)
    tdee = bmr * activity_multiplier(profile.activity_level, config)
    calories = max(0.0, tdee + goal_adjustment(profile.fitness_goal, config))

    protein = weight * protein_factor(profile.fitness_goal, profile.nutrition_approach, config)
    fat = (calories * fat_fraction(profile.nutrition_approach, config)) / KCAL_PER_G_FAT
    carbs = (calories - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT) / KCAL_PER_G_CARBS
    # Protein and fat alone can exceed the calorie budget.
    carbs = max(config.carb_floor_g, carbs)
    return bmr, tdee, calories, protein, fat, carbs


def compute_energy_targets(
    profile: BiometricProfile,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> EnergyTargets:
    """BMR, TDEE, daily calories and macro grams for a profile."""
    defaults_used: list[str] = []

    weight = _positive(profile.weight_kg)
    if weight is None:
        weight = config.default_weight_kg
        defaults_used.append("weight_kg")
    height = _positive(profile.height_cm)
    if height is None:
        height = config.default_height_cm
        defaults_used.append("height_cm")
    age = _positive(profile.age)
    if age is None:
        age = float(config.default_age)
        defaults_used.append("age")

    values = _raw_targets(weight, height, age, profile, config)
    if not all(math.isfinite(v) for v in values):
        # Finite inputs large enough to overflow are treated as missing.
        weight, height, age = config.default_weight_kg, config.default_height_cm, float(config.default_age)
        defaults_used = ["weight_kg", "height_cm", "age"]
        values = _raw_targets(weight, height, age, profile, config)
    bmr, tdee, calories, protein, fat, carbs = values

    return EnergyTargets(
        bmr=max(0, round(bmr)),
        tdee=max(0, round(tdee)),
        daily_calories=round(calories),
        daily_protein=round(protein),
        daily_carbs=round(carbs),
        daily_fat=round(fat),
        defaults_used=defaults_used,
    )


def water_goal_ml(weight_kg: float | None, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """Daily water target: ~30 ml per kg, fixed default when weight is unknown."""
    weight = _positive(weight_kg)
    goal = weight * config.water_ml_per_kg if weight is not None else math.inf
    if not math.isfinite(goal):
        return config.default_water_goal_ml
    return round(goal)


# ---------------------------------------------------------------------------
# Macro display helpers
# ---------------------------------------------------------------------------

def _percent(part: float, whole: float) -> int:
    share = (part / whole) * 100
    if math.isnan(share):
        return 0
    if math.isinf(share):
        return 100 if share > 0 else 0
    return round(share)


def macro_percentage(consumed: float, target: float) -> int:
    """Consumed share of a target in percent, capped at 100."""
    if not target:
        return 0
    return min(_percent(consumed, target), 100)


def macro_remaining(consumed: float, target: float) -> float:
    return max(0.0, target - consumed)


def calories_from_macros(protein: float, carbs: float, fat: float) -> float:
    return protein * KCAL_PER_G_PROTEIN + carbs * KCAL_PER_G_CARBS + fat * KCAL_PER_G_FAT


def macro_split(protein: float, carbs: float, fat: float) -> dict[str, int]:
    """Percent of calories contributed by each macro."""
    total = calories_from_macros(protein, carbs, fat)
    if total <= 0:
        return {"protein": 0, "carbs": 0, "fat": 0}
    return {
        "protein": _percent(protein * KCAL_PER_G_PROTEIN, total),
        "carbs": _percent(carbs * KCAL_PER_G_CARBS, total),
        "fat": _percent(fat * KCAL_PER_G_FAT, total),
    }
