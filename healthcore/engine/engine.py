"""MetricsEngine — the calculators bound to one configuration and catalog.

Holds no per-user state; every call takes a fresh snapshot and returns
plain values. Safe to share across requests and threads.
"""

from __future__ import annotations

from typing import Iterable

from healthcore.engine import achievements, activity, cycle, energy, onboarding, vitality
from healthcore.engine.achievements import AchievementDefinition
from healthcore.engine.catalog import DEFAULT_CATALOG
from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import (
    AchievementCard,
    AchievementEvaluation,
    BiometricProfile,
    CyclePhaseInputs,
    EnergyTargets,
    ExerciseLibraryEntry,
    ExerciseLogCandidate,
    LifeStageStatus,
    ResolvedExercise,
    StatsBundle,
    StreakSummary,
    VitalityBreakdown,
    VitalityInputs,
    WellnessAnswers,
)


class MetricsEngine:
    def __init__(
        self,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        catalog: Iterable[AchievementDefinition] = DEFAULT_CATALOG,
    ):
        self.config = config
        self.catalog: tuple[AchievementDefinition, ...] = tuple(catalog)

    def energy_targets(self, profile: BiometricProfile) -> EnergyTargets:
        return energy.compute_energy_targets(profile, self.config)

    def water_goal_ml(self, weight_kg: float | None) -> int:
        return energy.water_goal_ml(weight_kg, self.config)

    def resolve_exercise(self, candidate: ExerciseLogCandidate) -> ResolvedExercise:
        return activity.resolve_exercise(candidate, self.config)

    def step_calories(self, steps: float) -> int:
        return activity.step_calories(steps, self.config)

    def resolve_library_exercise(
        self,
        entry: ExerciseLibraryEntry,
        duration_minutes: float,
        weight_kg: float | None = None,
        target_calories: float | None = None,
    ) -> ResolvedExercise:
        return activity.resolve_library_exercise(entry, duration_minutes, weight_kg, target_calories, self.config)

    def vitality(self, inputs: VitalityInputs) -> VitalityBreakdown:
        return vitality.vitality_breakdown(inputs, self.config)

    def life_stage(self, inputs: CyclePhaseInputs) -> LifeStageStatus:
        return cycle.life_stage_status(inputs, self.config)

    def streaks(self, stats: StatsBundle) -> StreakSummary:
        return achievements.metric_streaks(stats, self.config)

    def holistic_score(self, answers: WellnessAnswers) -> int:
        return onboarding.holistic_score(answers, self.config)

    def evaluate_achievements(
        self,
        stats: StatsBundle,
        unlocked: Iterable[str],
        now_ms: int | None = None,
    ) -> AchievementEvaluation:
        if now_ms is None:
            now_ms = cycle.now_epoch_ms()
        return achievements.evaluate_achievements(self.catalog, stats, unlocked, now_ms)

    def achievement_cards(self, evaluation: AchievementEvaluation, locale: str = "en") -> list[AchievementCard]:
        return achievements.achievement_cards(self.catalog, evaluation, locale)


default_engine = MetricsEngine()
