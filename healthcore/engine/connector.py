"""Store adapter — async access to profiles, daily logs and achievements.

Tables:
  user_profiles       user_id, sex, age, weight_kg, height_cm, target_weight_kg,
                      activity_level, fitness_goal, nutrition_approach,
                      step_goal, calorie_goal
  daily_logs          id, user_id, date, kind, payload (JSONB), created_at
  achievements        user_id, badge_id, unlocked_at (epoch ms)
                      UNIQUE (user_id, badge_id)
  life_stage_tracking user_id, mode ('cycle' | 'pregnancy'), reference_ms

Reads return None / empty collections when nothing is found. The only write
is an insert-only unlock, idempotent through ON CONFLICT DO NOTHING.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from healthcore.engine.models import UnlockEvent
from healthcore.logger import get_logger

logger = get_logger("healthcore.engine.connector")


async def _fetch_one(session: AsyncSession, query: str, params: dict[str, Any]) -> dict[str, Any] | None:
    result = await session.execute(text(query), params)
    row = result.fetchone()
    if row is None:
        return None
    return dict(zip(result.keys(), row))


async def fetch_profile(session: AsyncSession, user_id: str) -> dict[str, Any] | None:
    query = (
        "SELECT user_id, sex, age, weight_kg, height_cm, target_weight_kg, "
        "activity_level, fitness_goal, nutrition_approach, step_goal, calorie_goal "
        "FROM user_profiles WHERE user_id = :user_id"
    )
    return await _fetch_one(session, query, {"user_id": user_id})


async def fetch_life_stage(session: AsyncSession, user_id: str) -> dict[str, Any] | None:
    query = (
        "SELECT mode, reference_ms FROM life_stage_tracking "
        "WHERE user_id = :user_id"
    )
    return await _fetch_one(session, query, {"user_id": user_id})


async def fetch_log_rows(
    session: AsyncSession,
    user_id: str,
    start: date,
    end_exclusive: date,
) -> Sequence[dict[str, Any]]:
    """Log rows for [start, end_exclusive), oldest first."""
    query = (
        "SELECT date, kind, payload FROM daily_logs "
        "WHERE user_id = :user_id AND date >= :start AND date < :end "
        "ORDER BY date, created_at"
    )
    result = await session.execute(text(query), {"user_id": user_id, "start": start, "end": end_exclusive})
    columns = result.keys()
    return [dict(zip(columns, r)) for r in result.fetchall()]


async def fetch_unlocked_ids(session: AsyncSession, user_id: str) -> set[str]:
    query = "SELECT badge_id FROM achievements WHERE user_id = :user_id"
    result = await session.execute(text(query), {"user_id": user_id})
    return {row[0] for row in result.fetchall()}


async def insert_unlock_events(
    session: AsyncSession,
    user_id: str,
    events: Iterable[UnlockEvent],
) -> int:
    """Persist unlock events; an id already stored for the user is left untouched."""
    events = list(events)
    if not events:
        return 0
    query = (
        "INSERT INTO achievements (user_id, badge_id, unlocked_at) "
        "VALUES (:user_id, :badge_id, :unlocked_at) "
        "ON CONFLICT (user_id, badge_id) DO NOTHING"
    )
    for event in events:
        await session.execute(
            text(query),
            {"user_id": user_id, "badge_id": event.achievement_id, "unlocked_at": event.unlocked_at},
        )
    await session.commit()
    logger.info("Stored %d achievement unlock(s) for user %s", len(events), user_id)
    return len(events)
