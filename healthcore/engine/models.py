"""Engine value models — Pydantic v2, immutable snapshots.

Enumerated profile fields are plain optional strings on purpose: unknown
values must reach the calculators, which map them to documented defaults
instead of rejecting the request.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healthcore.engine.localized import LocalizedText, parse_text


class Sex(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    lightly_active = "lightly_active"
    moderately_active = "moderately_active"
    very_active = "very_active"
    extremely_active = "extremely_active"


class FitnessGoal(str, Enum):
    lose_weight = "lose_weight"
    build_muscle = "build_muscle"
    maintain = "maintain"
    improve_endurance = "improve_endurance"
    general_health = "general_health"


class NutritionApproach(str, Enum):
    balanced = "balanced"
    high_protein = "high_protein"
    low_carb = "low_carb"
    plant_based = "plant_based"
    flexible = "flexible"


class TrackingMode(str, Enum):
    cycle = "cycle"
    pregnancy = "pregnancy"


class WeightUnit(str, Enum):
    kg = "kg"
    lbs = "lbs"


class HeightUnit(str, Enum):
    cm = "cm"
    ft = "ft"


class VolumeUnit(str, Enum):
    ml = "ml"
    oz = "oz"


class StressLevel(str, Enum):
    low = "low"
    moderate = "moderate"
    high = "high"
    very_high = "very_high"


class FitnessExperience(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class BiometricProfile(_Value):
    """Biometrics in metric units (imperial is converted at the boundary)."""

    sex: str | None = None
    age: int | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    target_weight_kg: float | None = None
    activity_level: str | None = None
    fitness_goal: str | None = None
    nutrition_approach: str | None = None


class UnitPreference(_Value):
    weight: WeightUnit = WeightUnit.kg
    height: HeightUnit = HeightUnit.cm
    volume: VolumeUnit = VolumeUnit.ml


class DailyAggregate(_Value):
    day: date
    calories_eaten: float = 0.0
    calories_burned_exercise: float = 0.0
    calories_burned_steps: float = 0.0
    steps: int = 0
    water_ml: float = 0.0
    mood_rating: int | None = None
    minutes_exercised: float = 0.0
    workout_count: int = 0
    workout_types: tuple[str, ...] = ()


class ExerciseLibraryEntry(_Value):
    name: LocalizedText
    exercise_type: str = "cardio"
    met: float | None = None
    calories_per_minute: float | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _normalise_name(cls, value):
        return parse_text(value)


class ExerciseLogCandidate(_Value):
    """A workout about to be logged.

    Either `met` or `target_calories` drives the result; when the user
    typed a calorie figure it wins and the stored MET is derived from it.
    """

    duration_minutes: float
    weight_kg: float | None = None
    met: float | None = None
    target_calories: float | None = None
    calories_per_minute: float | None = None


class VitalityInputs(_Value):
    steps: float = 0
    step_goal: float = 10000
    mood_rating: int | None = None  # None or 0 means no mood logged
    calories_eaten: float = 0
    calorie_goal: float = 2000
    water_volume: float = 0
    water_goal: float = 2000


class CyclePhaseInputs(_Value):
    reference_ms: int  # last period start or conception date, epoch ms
    mode: TrackingMode = TrackingMode.cycle
    now_ms: int | None = None


class StatsBundle(_Value):
    today: date
    totals: DailyAggregate
    history: dict[date, DailyAggregate] = Field(default_factory=dict)


class WellnessAnswers(_Value):
    """Lifestyle answers from the onboarding questionnaire."""

    sleep_hours: float | None = None
    stress_level: str | None = None
    weekly_workout_time: float | None = None  # hours per week
    fitness_experience: str | None = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class EnergyTargets(_Value):
    bmr: int
    tdee: int
    daily_calories: int
    daily_protein: int
    daily_carbs: int
    daily_fat: int
    defaults_used: list[str] = Field(default_factory=list)


class VitalityBreakdown(_Value):
    score: int | None  # None == "no data" for the day
    no_data: bool
    steps_score: float = 0.0
    mood_score: float = 0.0
    fuel_score: float = 0.0


class ResolvedExercise(_Value):
    met: float
    calories_burned: int
    met_source: Literal["explicit", "derived", "fallback", "default"]


class CycleStatus(_Value):
    mode: Literal["cycle"] = "cycle"
    days_elapsed: int
    cycle_day: int
    phase: str
    description: str


class PregnancyStatus(_Value):
    mode: Literal["pregnancy"] = "pregnancy"
    days_elapsed: int
    weeks: int
    days: int
    trimester: int
    baby_size: str
    progress: float


LifeStageStatus = Union[CycleStatus, PregnancyStatus]


class UnlockEvent(_Value):
    achievement_id: str
    unlocked_at: int  # epoch ms


class AchievementEvaluation(_Value):
    unlock_events: list[UnlockEvent] = Field(default_factory=list)
    unlocked: frozenset[str] = frozenset()
    progress: dict[str, float] = Field(default_factory=dict)


class StreakSummary(_Value):
    """Current day streak per tracked metric."""

    workout: int = 0
    water: int = 0
    mood: int = 0


class AchievementCard(_Value):
    id: str
    title: str
    description: str
    icon: str
    kind: str
    unlocked: bool
    progress: float


class DailyGuidance(BaseModel):
    """Everything the app shows for one user-day — always constructible."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    schema_version: str = "v0"
    user_id: str
    day: date
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    energy: EnergyTargets
    water_goal_ml: int
    totals: DailyAggregate
    vitality: VitalityBreakdown
    life_stage: LifeStageStatus | None = None
    streaks: StreakSummary = Field(default_factory=StreakSummary)
    achievements: list[AchievementCard] = Field(default_factory=list)
    new_unlocks: list[UnlockEvent] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
