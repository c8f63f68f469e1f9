"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from healthcore.db import get_session
from healthcore.engine.models import DailyAggregate, StatsBundle
from healthcore.main import app

MS_PER_DAY = 86_400_000
NOW_MS = 1_771_156_800_000  # 2026-02-15T12:00:00Z


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in endpoint tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None):
        self._rows = rows or []
        self.committed = False
        self.executed: list[tuple[str, dict[str, Any] | None]] = []

    async def execute(self, stmt, params=None):
        self.executed.append((str(stmt), params))
        return FakeResult(self._rows)

    async def commit(self):
        self.committed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]

    def fetchone(self):
        rows = self.fetchall()
        return rows[0] if rows else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        yield fake_session

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Row / value helpers
# ---------------------------------------------------------------------------

def make_log_row(d: date, kind: str, **payload: Any) -> dict[str, Any]:
    """Helper to build a fake daily_logs row dict."""
    return {"date": d, "kind": kind, "payload": payload}


def make_profile_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "user_id": "user-1",
        "sex": "male",
        "age": 30,
        "weight_kg": 80.0,
        "height_cm": 180.0,
        "target_weight_kg": None,
        "activity_level": "moderately_active",
        "fitness_goal": "maintain",
        "nutrition_approach": "balanced",
        "step_goal": None,
        "calorie_goal": None,
    }
    row.update(overrides)
    return row


def make_stats(today: date, history: dict[date, DailyAggregate] | None = None) -> StatsBundle:
    history = dict(history or {})
    history.setdefault(today, DailyAggregate(day=today))
    return StatsBundle(today=today, totals=history[today], history=history)
