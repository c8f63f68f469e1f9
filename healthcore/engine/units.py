"""Metric <-> imperial conversion.

Biometrics are stored metric (kg, cm, ml); imperial only exists at the
display boundary. Each conversion uses one canonical constant in both
directions so a round trip does not drift. Total over any input: negative
or non-finite values convert to 0.
"""

from __future__ import annotations

import math

from healthcore.engine.models import HeightUnit, UnitPreference, VolumeUnit, WeightUnit

LBS_PER_KG = 2.2046226218
CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54
OZ_PER_ML = 0.033814


def _clean(value: float | None) -> float:
    if value is None:
        return 0.0
    try:
        value = float(value)
    except (OverflowError, TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def kg_to_lbs(kg: float) -> float:
    return _clean(kg) * LBS_PER_KG


def lbs_to_kg(lbs: float) -> float:
    return _clean(lbs) / LBS_PER_KG


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Whole feet plus rounded inches; 12 rounded inches carry into a foot."""
    total_feet = _clean(cm) / CM_PER_FOOT
    feet = max(0, math.floor(total_feet))
    inches = max(0, round((total_feet % 1) * 12))
    if inches >= 12:
        feet, inches = feet + 1, 0
    return feet, inches


def feet_inches_to_cm(feet: float, inches: float = 0.0) -> float:
    return _clean(feet) * CM_PER_FOOT + _clean(inches) * CM_PER_INCH


def ml_to_oz(ml: float) -> float:
    return _clean(ml) * OZ_PER_ML


def oz_to_ml(oz: float) -> float:
    return _clean(oz) / OZ_PER_ML


# ---------------------------------------------------------------------------
# Display helpers driven by UnitPreference
# ---------------------------------------------------------------------------

def weight_to_display(kg: float, prefs: UnitPreference) -> float:
    return kg_to_lbs(kg) if prefs.weight == WeightUnit.lbs else _clean(kg)


def weight_from_display(value: float, prefs: UnitPreference) -> float:
    """Displayed weight -> kg."""
    return lbs_to_kg(value) if prefs.weight == WeightUnit.lbs else _clean(value)


def height_to_display(cm: float, prefs: UnitPreference) -> float | tuple[int, int]:
    return cm_to_feet_inches(cm) if prefs.height == HeightUnit.ft else _clean(cm)


def height_from_display(value: float | tuple[float, float], prefs: UnitPreference) -> float:
    """Displayed height -> cm. `ft` preference expects a (feet, inches) pair."""
    if prefs.height == HeightUnit.ft:
        if isinstance(value, (tuple, list)):
            feet, inches = (tuple(value) + (0.0, 0.0))[:2]
            return feet_inches_to_cm(feet, inches)
        return feet_inches_to_cm(value)
    return _clean(value)


def volume_to_display(ml: float, prefs: UnitPreference) -> float:
    return ml_to_oz(ml) if prefs.volume == VolumeUnit.oz else _clean(ml)


def volume_from_display(value: float, prefs: UnitPreference) -> float:
    return oz_to_ml(value) if prefs.volume == VolumeUnit.oz else _clean(value)
