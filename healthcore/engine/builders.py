"""Daily guidance builder — store reads in, engine values out.

Reads the profile, the log window, the unlocked achievement set and the
life-stage reference; runs the engine; persists new unlock events; returns a
DailyGuidance envelope. Missing data degrades to warnings, never errors,
except for a user that does not exist or has not finished onboarding.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from healthcore.config import settings
from healthcore.engine import aggregation, connector, cycle, energy
from healthcore.engine.engine import MetricsEngine, default_engine
from healthcore.engine.models import (
    BiometricProfile,
    CyclePhaseInputs,
    DailyGuidance,
    LifeStageStatus,
    TrackingMode,
    VitalityInputs,
)
from healthcore.engine.onboarding import is_onboarded, missing_biometrics
from healthcore.exceptions import NotFoundError, NotOnboardedError
from healthcore.logger import get_logger

logger = get_logger("healthcore.engine.builders")

_PROFILE_FIELDS = (
    "sex",
    "age",
    "weight_kg",
    "height_cm",
    "target_weight_kg",
    "activity_level",
    "fitness_goal",
    "nutrition_approach",
)


def profile_from_row(row: dict[str, Any]) -> BiometricProfile:
    return BiometricProfile(**{k: row.get(k) for k in _PROFILE_FIELDS})


def _life_stage(
    row: dict[str, Any] | None,
    now_ms: int,
    engine: MetricsEngine,
    warnings: list[str],
) -> LifeStageStatus | None:
    if not row or row.get("reference_ms") is None:
        return None
    mode = str(row.get("mode") or "").lower()
    if mode not in {m.value for m in TrackingMode}:
        warnings.append(f"Unknown life-stage mode '{row.get('mode')}' ignored.")
        return None
    inputs = CyclePhaseInputs(reference_ms=int(row["reference_ms"]), mode=mode, now_ms=now_ms)
    return engine.life_stage(inputs)


async def build_daily_guidance(
    session: AsyncSession,
    user_id: str,
    target_date: date,
    now_ms: int | None = None,
    engine: MetricsEngine = default_engine,
    locale: str | None = None,
) -> DailyGuidance:
    if now_ms is None:
        now_ms = cycle.now_epoch_ms()
    warnings: list[str] = []

    profile_row = await connector.fetch_profile(session, user_id)
    if profile_row is None:
        raise NotFoundError("User", user_id)
    profile = profile_from_row(profile_row)
    if not is_onboarded(profile):
        raise NotOnboardedError(user_id, missing_biometrics(profile))

    targets = engine.energy_targets(profile)
    if targets.defaults_used:
        msg = f"Defaults used for: {', '.join(targets.defaults_used)}"
        logger.warning("User %s: %s", user_id, msg)
        warnings.append(msg)
    unknown = energy.unknown_enum_fields(profile, engine.config)
    if unknown:
        logger.warning("User %s: unrecognised values for %s, defaults applied", user_id, ", ".join(unknown))
        warnings.append(f"Unrecognised values replaced by defaults: {', '.join(unknown)}")

    window_start = target_date - timedelta(days=max(1, settings.history_days) - 1)
    rows = await connector.fetch_log_rows(session, user_id, window_start, target_date + timedelta(days=1))
    stats = aggregation.build_stats_bundle(
        target_date, list(rows), settings.history_days, profile.weight_kg, engine.config
    )
    totals = stats.totals

    water_goal = engine.water_goal_ml(profile.weight_kg)
    calorie_goal = profile_row.get("calorie_goal") or targets.daily_calories or settings.default_calorie_goal
    step_goal = profile_row.get("step_goal") or settings.default_step_goal
    vitality = engine.vitality(
        VitalityInputs(
            steps=totals.steps,
            step_goal=step_goal,
            mood_rating=totals.mood_rating,
            calories_eaten=totals.calories_eaten,
            calorie_goal=calorie_goal,
            water_volume=totals.water_ml,
            water_goal=water_goal,
        )
    )
    if vitality.no_data:
        warnings.append("No steps, food or mood logged for this day.")

    life_stage = _life_stage(await connector.fetch_life_stage(session, user_id), now_ms, engine, warnings)

    unlocked = await connector.fetch_unlocked_ids(session, user_id)
    evaluation = engine.evaluate_achievements(stats, unlocked, now_ms)
    if evaluation.unlock_events:
        await connector.insert_unlock_events(session, user_id, evaluation.unlock_events)

    return DailyGuidance(
        user_id=user_id,
        day=target_date,
        energy=targets,
        water_goal_ml=water_goal,
        totals=totals,
        vitality=vitality,
        life_stage=life_stage,
        streaks=engine.streaks(stats),
        achievements=engine.achievement_cards(evaluation, locale or settings.default_locale),
        new_unlocks=evaluation.unlock_events,
        warnings=warnings,
    )
