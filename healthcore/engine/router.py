"""Engine HTTP router — daily guidance plus stateless calculators."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from healthcore.auth import current_user_id, verify_api_key
from healthcore.config import settings
from healthcore.db import get_session
from healthcore.engine import activity, builders
from healthcore.engine.engine import default_engine
from healthcore.engine.localized import resolve_text
from healthcore.engine.models import (
    BiometricProfile,
    CyclePhaseInputs,
    DailyGuidance,
    EnergyTargets,
    ExerciseLogCandidate,
    LifeStageStatus,
    ResolvedExercise,
    VitalityBreakdown,
    VitalityInputs,
    WellnessAnswers,
)

router = APIRouter(prefix="/engine", tags=["engine"])


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date for '{name}': {value}")


# ---------------------------------------------------------------------------
# /engine/guidance/{day}
# ---------------------------------------------------------------------------


@router.get("/guidance/{day}", response_model=DailyGuidance)
async def get_daily_guidance(
    day: str,
    session: AsyncSession = Depends(get_session),
    _: str = Depends(verify_api_key),
    user_id: str = Depends(current_user_id),
    locale: str | None = Query(default=None, description="Display locale (e.g. en, es)"),
) -> DailyGuidance:
    target = _parse_date(day, "day")
    return await builders.build_daily_guidance(session, user_id, target, locale=locale)


# ---------------------------------------------------------------------------
# Stateless calculators
# ---------------------------------------------------------------------------


@router.post("/energy", response_model=EnergyTargets)
async def energy_targets(
    profile: BiometricProfile,
    _: str = Depends(verify_api_key),
) -> EnergyTargets:
    return default_engine.energy_targets(profile)


@router.post("/vitality", response_model=VitalityBreakdown)
async def vitality_score(
    inputs: VitalityInputs,
    _: str = Depends(verify_api_key),
) -> VitalityBreakdown:
    return default_engine.vitality(inputs)


@router.post("/exercise", response_model=ResolvedExercise)
async def resolve_exercise(
    candidate: ExerciseLogCandidate,
    _: str = Depends(verify_api_key),
) -> ResolvedExercise:
    if candidate.duration_minutes <= 0:
        raise HTTPException(status_code=422, detail="duration_minutes must be > 0")
    return default_engine.resolve_exercise(candidate)


@router.post("/life-stage", response_model=LifeStageStatus)
async def life_stage(
    inputs: CyclePhaseInputs,
    _: str = Depends(verify_api_key),
) -> LifeStageStatus:
    return default_engine.life_stage(inputs)


@router.post("/holistic-score")
async def holistic_score(
    answers: WellnessAnswers,
    _: str = Depends(verify_api_key),
):
    return {"score": default_engine.holistic_score(answers)}


# ---------------------------------------------------------------------------
# Catalog / reference tables
# ---------------------------------------------------------------------------


@router.get("/achievements")
async def achievements_catalog(
    _: str = Depends(verify_api_key),
    locale: str | None = Query(default=None),
) -> list[dict]:
    loc = locale or settings.default_locale
    return [
        {
            "id": d.id,
            "title": resolve_text(d.title, loc),
            "description": resolve_text(d.description, loc),
            "icon": d.icon,
            "kind": d.kind,
        }
        for d in default_engine.catalog
    ]


@router.get("/met")
async def met_reference(
    _: str = Depends(verify_api_key),
    name: str | None = Query(default=None, description="Exercise name to suggest a MET for"),
) -> dict:
    config = default_engine.config
    body: dict = {"default_met": config.default_met, "values": dict(config.met_values)}
    if name is not None:
        body["suggested"] = {"name": name, "met": activity.suggested_met(name, config)}
    return body
