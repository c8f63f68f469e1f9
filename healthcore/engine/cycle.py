"""Menstrual cycle phase and pregnancy progress from a single reference date.

Uses a fixed 28-day cycle model; per-user cycle length is not tracked.
Times are epoch milliseconds and `now_ms` is injectable. A reference date
in the future counts as zero elapsed days rather than an error.
"""

from __future__ import annotations

import math
import time

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.models import (
    CyclePhaseInputs,
    CycleStatus,
    LifeStageStatus,
    PregnancyStatus,
    TrackingMode,
)

MS_PER_DAY = 86_400_000


def now_epoch_ms() -> int:
    return int(time.time() * 1000)


def days_elapsed(reference_ms: int, now_ms: int | None = None) -> int:
    """ceil((now - reference) / 1 day), never negative."""
    if now_ms is None:
        now_ms = now_epoch_ms()
    return max(0, math.ceil((now_ms - reference_ms) / MS_PER_DAY))


def cycle_day_for(diff_days: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    """1-indexed day within the cycle; a full multiple of the length is the last day."""
    length = config.cycle_length_days
    return (max(0, diff_days) % length) or length


def phase_for_day(cycle_day: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> tuple[str, str]:
    for last_day, name, description in config.cycle_phases:
        if cycle_day <= last_day:
            return name, description
    _, name, description = config.cycle_phases[-1]
    return name, description


def cycle_status(
    reference_ms: int,
    now_ms: int | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> CycleStatus:
    diff = days_elapsed(reference_ms, now_ms)
    day = cycle_day_for(diff, config)
    phase, description = phase_for_day(day, config)
    return CycleStatus(days_elapsed=diff, cycle_day=day, phase=phase, description=description)


def trimester_for_week(weeks: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> int:
    if weeks >= config.third_trimester_week:
        return 3
    if weeks >= config.second_trimester_week:
        return 2
    return 1


def baby_size_for_week(weeks: int, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> str:
    if 0 <= weeks < len(config.baby_sizes):
        return config.baby_sizes[weeks]
    return config.baby_size_fallback


def pregnancy_status(
    reference_ms: int,
    now_ms: int | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> PregnancyStatus:
    diff = days_elapsed(reference_ms, now_ms)
    weeks, days = divmod(diff, 7)
    return PregnancyStatus(
        days_elapsed=diff,
        weeks=weeks,
        days=days,
        trimester=trimester_for_week(weeks, config),
        baby_size=baby_size_for_week(weeks, config),
        progress=min(weeks / config.full_term_weeks, 1.0),
    )


def life_stage_status(
    inputs: CyclePhaseInputs,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> LifeStageStatus:
    """Dispatch on the tracking mode."""
    if inputs.mode == TrackingMode.pregnancy:
        return pregnancy_status(inputs.reference_ms, inputs.now_ms, config)
    return cycle_status(inputs.reference_ms, inputs.now_ms, config)
