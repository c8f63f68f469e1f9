"""Tests for the DailyGuidance envelope and engine value models."""

from datetime import date

import pytest
from pydantic import ValidationError

from healthcore.engine.localized import LocalizedMap, PlainText
from healthcore.engine.models import (
    BiometricProfile,
    DailyAggregate,
    DailyGuidance,
    EnergyTargets,
    ExerciseLibraryEntry,
    PregnancyStatus,
    VitalityBreakdown,
)

DAY = date(2026, 2, 15)


def _minimal_guidance(**overrides) -> DailyGuidance:
    defaults = dict(
        user_id="user-1",
        day=DAY,
        energy=EnergyTargets(
            bmr=1780, tdee=2759, daily_calories=2759, daily_protein=128, daily_carbs=355, daily_fat=92
        ),
        water_goal_ml=2400,
        totals=DailyAggregate(day=DAY),
        vitality=VitalityBreakdown(score=None, no_data=True),
    )
    defaults.update(overrides)
    return DailyGuidance(**defaults)


class TestDailyGuidanceDefaults:
    def test_schema_version(self):
        assert _minimal_guidance().schema_version == "v0"

    def test_auto_id(self):
        a, b = _minimal_guidance(), _minimal_guidance()
        assert a.id and a.id != b.id

    def test_generated_at_utc(self):
        assert _minimal_guidance().generated_at.tzinfo is not None

    def test_empty_collections_by_default(self):
        g = _minimal_guidance()
        assert g.achievements == []
        assert g.new_unlocks == []
        assert g.warnings == []
        assert g.life_stage is None
        assert g.streaks.model_dump() == {"workout": 0, "water": 0, "mood": 0}

    def test_life_stage_serialises_with_mode(self):
        status = PregnancyStatus(
            days_elapsed=98, weeks=14, days=0, trimester=2, baby_size="Cucumber", progress=0.35
        )
        data = _minimal_guidance(life_stage=status).model_dump(mode="json")
        assert data["life_stage"]["mode"] == "pregnancy"
        assert data["life_stage"]["baby_size"] == "Cucumber"
        assert data["vitality"]["score"] is None
        assert data["day"] == "2026-02-15"


class TestValueModels:
    def test_values_are_frozen(self):
        profile = BiometricProfile(age=30)
        with pytest.raises(ValidationError):
            profile.age = 31

    def test_unknown_enum_strings_accepted(self):
        profile = BiometricProfile(activity_level="couch_potato", sex="other")
        assert profile.activity_level == "couch_potato"

    def test_library_name_plain(self):
        entry = ExerciseLibraryEntry(name="Rowing")
        assert entry.name == PlainText("Rowing")

    def test_library_name_localized(self):
        entry = ExerciseLibraryEntry(name={"en": "Rowing", "es": "Remo"})
        assert isinstance(entry.name, LocalizedMap)
        assert entry.name.translations["es"] == "Remo"

    def test_energy_defaults_used_empty(self):
        t = EnergyTargets(bmr=0, tdee=0, daily_calories=0, daily_protein=0, daily_carbs=50, daily_fat=0)
        assert t.defaults_used == []
