"""Achievement evaluation — read the unlocked set, propose unlock events.

Unlocking is monotonic: ids already unlocked are never re-emitted or
dropped, and progress is only reported for achievements still locked.
Progress has no side effects, even at 100%.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Iterable, Mapping

from healthcore.engine.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from healthcore.engine.localized import LocalizedText, parse_text, resolve_text
from healthcore.engine.models import (
    AchievementCard,
    AchievementEvaluation,
    DailyAggregate,
    StatsBundle,
    StreakSummary,
    UnlockEvent,
)
from healthcore.engine.units import ml_to_oz
from healthcore.engine.vitality import has_mood

Predicate = Callable[[StatsBundle], bool]
ProgressFn = Callable[[StatsBundle], float]


@dataclass(frozen=True, slots=True)
class AchievementDefinition:
    id: str
    title: LocalizedText
    description: LocalizedText
    icon: str
    predicate: Predicate
    progress_fn: ProgressFn
    kind: str = "threshold"  # "threshold" | "streak"


def achievement(
    id: str,
    title,
    description,
    icon: str,
    predicate: Predicate,
    progress_fn: ProgressFn | None = None,
    kind: str = "threshold",
) -> AchievementDefinition:
    """Build a definition; streak achievements always report 0 progress."""
    if kind == "streak" or progress_fn is None:
        progress_fn = no_progress
    return AchievementDefinition(
        id=id,
        title=parse_text(title),
        description=parse_text(description),
        icon=icon,
        predicate=predicate,
        progress_fn=progress_fn,
        kind=kind,
    )


def no_progress(_: StatsBundle) -> float:
    return 0.0


def capped_progress(value: float, target: float) -> float:
    """value / target as a percentage in [0, 100]."""
    if target <= 0:
        return 0.0
    return min(100.0, max(0.0, (value / target) * 100.0))


def consecutive_days(
    history: Mapping[date, DailyAggregate],
    today: date,
    predicate: Callable[[DailyAggregate], bool],
) -> int:
    """Length of the unbroken run of qualifying days ending at `today`."""
    streak = 0
    check_date = today
    while True:
        day = history.get(check_date)
        if day is None or not predicate(day):
            break
        streak += 1
        check_date -= timedelta(days=1)
    return streak


def metric_streak(
    history: Mapping[date, DailyAggregate],
    today: date,
    predicate: Callable[[DailyAggregate], bool],
) -> int:
    """Like `consecutive_days`, but a day not yet logged today keeps yesterday's run alive."""
    current = history.get(today)
    if current is not None and predicate(current):
        return consecutive_days(history, today, predicate)
    return consecutive_days(history, today - timedelta(days=1), predicate)


def metric_streaks(stats: StatsBundle, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> StreakSummary:
    """Workout, water and mood streaks over the history window."""
    return StreakSummary(
        workout=metric_streak(stats.history, stats.today, lambda d: d.calories_burned_exercise > 0),
        water=metric_streak(stats.history, stats.today, lambda d: ml_to_oz(d.water_ml) >= config.water_streak_oz),
        mood=metric_streak(stats.history, stats.today, lambda d: has_mood(d.mood_rating)),
    )


def _safe_bool(fn: Predicate, stats: StatsBundle) -> bool:
    try:
        return bool(fn(stats))
    except (ArithmeticError, AttributeError, KeyError, TypeError, ValueError):
        return False


def _safe_progress(fn: ProgressFn, stats: StatsBundle) -> float:
    try:
        value = float(fn(stats))
    except (ArithmeticError, AttributeError, KeyError, TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return min(100.0, max(0.0, value))


def evaluate_achievements(
    catalog: Iterable[AchievementDefinition],
    stats: StatsBundle,
    unlocked: Iterable[str],
    now_ms: int,
) -> AchievementEvaluation:
    """Unlock events for newly satisfied definitions plus progress for the rest."""
    already = frozenset(unlocked)
    events: list[UnlockEvent] = []
    progress: dict[str, float] = {}
    newly: set[str] = set()

    for definition in catalog:
        if definition.id in already or definition.id in newly:
            continue
        if _safe_bool(definition.predicate, stats):
            events.append(UnlockEvent(achievement_id=definition.id, unlocked_at=now_ms))
            newly.add(definition.id)
        else:
            progress[definition.id] = _safe_progress(definition.progress_fn, stats)

    return AchievementEvaluation(
        unlock_events=events,
        unlocked=already | newly,
        progress=progress,
    )


def achievement_cards(
    catalog: Iterable[AchievementDefinition],
    evaluation: AchievementEvaluation,
    locale: str = "en",
) -> list[AchievementCard]:
    """Display rows for every catalog entry, unlocked ones at 100."""
    cards: list[AchievementCard] = []
    for definition in catalog:
        is_unlocked = definition.id in evaluation.unlocked
        cards.append(
            AchievementCard(
                id=definition.id,
                title=resolve_text(definition.title, locale),
                description=resolve_text(definition.description, locale),
                icon=definition.icon,
                kind=definition.kind,
                unlocked=is_unlocked,
                progress=100.0 if is_unlocked else evaluation.progress.get(definition.id, 0.0),
            )
        )
    return cards
