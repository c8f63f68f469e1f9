"""Tests for the onboarding flow and profile completeness."""

import pytest

from healthcore.engine.models import BiometricProfile, WellnessAnswers
from healthcore.engine.onboarding import (
    holistic_score,
    OnboardingStep,
    is_onboarded,
    missing_biometrics,
    next_step,
    previous_step,
    validate_profile,
)


class TestSteps:
    def test_forward_sequence(self):
        step = OnboardingStep.identity
        seen = [step]
        while step != OnboardingStep.complete:
            step = next_step(step)
            seen.append(step)
        assert [s.value for s in seen] == [
            "identity", "biometrics", "training", "activity", "lifestyle", "mindset", "diet", "complete",
        ]

    def test_complete_is_terminal(self):
        assert next_step(OnboardingStep.complete) == OnboardingStep.complete

    def test_back(self):
        assert previous_step(OnboardingStep.biometrics) == OnboardingStep.identity
        assert previous_step(OnboardingStep.identity) == OnboardingStep.identity


class TestCompleteness:
    def test_onboarded(self):
        assert is_onboarded(BiometricProfile(age=30, weight_kg=80, height_cm=180))

    def test_missing_fields(self):
        profile = BiometricProfile(age=0, weight_kg=80)
        assert not is_onboarded(profile)
        assert missing_biometrics(profile) == ["age", "height_cm"]

    def test_none_profile(self):
        assert not is_onboarded(None)


class TestValidation:
    def test_valid(self):
        assert validate_profile(BiometricProfile(age=30, weight_kg=80, height_cm=180)) == []

    def test_out_of_range_and_missing(self):
        problems = validate_profile(BiometricProfile(age=12, height_cm=260))
        assert problems == [
            "age must be between 13 and 120",
            "weight_kg is required",
            "height_cm must be between 100 and 250",
        ]

    def test_bounds_inclusive(self):
        assert validate_profile(BiometricProfile(age=13, weight_kg=300, height_cm=100)) == []

    def test_unconvertible_age_is_out_of_range(self):
        profile = BiometricProfile(age=10**400, weight_kg=80, height_cm=180)
        assert validate_profile(profile) == ["age must be between 13 and 120"]
        assert not is_onboarded(profile)


class TestHolisticScore:
    def test_unanswered_is_base(self):
        assert holistic_score(WellnessAnswers()) == 50

    def test_best_answers(self):
        answers = WellnessAnswers(
            sleep_hours=8, stress_level="low", weekly_workout_time=3, fitness_experience="advanced"
        )
        assert holistic_score(answers) == 85

    def test_worst_answers(self):
        answers = WellnessAnswers(
            sleep_hours=5, stress_level="very_high", weekly_workout_time=0, fitness_experience="beginner"
        )
        assert holistic_score(answers) == 25

    @pytest.mark.parametrize(
        "hours,expected",
        [(5.9, 40), (6, 50), (6.9, 50), (7, 60), (9, 60), (9.1, 50)],
    )
    def test_sleep_boundaries(self, hours, expected):
        assert holistic_score(WellnessAnswers(sleep_hours=hours)) == expected

    @pytest.mark.parametrize(
        "hours,expected",
        [(0.5, 45), (1, 50), (2.9, 50), (3, 60)],
    )
    def test_weekly_workout_boundaries(self, hours, expected):
        assert holistic_score(WellnessAnswers(weekly_workout_time=hours)) == expected

    @pytest.mark.parametrize(
        "level,expected",
        [("low", 60), ("moderate", 60), ("high", 50), ("very_high", 40), ("Moderate", 60)],
    )
    def test_stress(self, level, expected):
        assert holistic_score(WellnessAnswers(stress_level=level)) == expected

    def test_experience_bonus_skips_beginners(self):
        assert holistic_score(WellnessAnswers(fitness_experience="intermediate")) == 55
        assert holistic_score(WellnessAnswers(fitness_experience="beginner")) == 50
