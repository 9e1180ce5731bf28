"""Withings measure type codes understood by the recorder.

Reference: https://developer.withings.com/api-reference/#operation/measure-getmeas
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

MEASURE_TYPES: Dict[int, str] = {
    1: "weight",  # kg
    4: "height",  # m
    5: "fat_free_mass",  # kg
    6: "fat_ratio",  # %
    8: "fat_mass_weight",  # kg
    9: "diastolic_blood_pressure",  # mmHg
    10: "systolic_blood_pressure",  # mmHg
    11: "heart_rate",  # bpm, BPM monitors and scales only
    12: "temperature",  # celsius
    54: "spo2",  # %
    71: "body_temperature",  # celsius
    73: "skin_temperature",  # celsius
    76: "muscle_mass",  # kg
    77: "hydration",  # kg
    88: "bone_mass",  # kg
    91: "pulse_wave_velocity",  # m/s
    123: "vo2_max",  # ml/min/kg
    135: "qrs_interval_duration",  # ECG
    136: "pr_interval_duration",  # ECG
    137: "qt_interval_duration",  # ECG
    138: "corrected_qt_interval_duration",  # ECG
    139: "atrial_fibrillation",  # PPG
}


def name_for(code: int) -> Optional[str]:
    """Return the metric name for ``code`` or ``None`` when it is unmapped."""

    return MEASURE_TYPES.get(code)


def known_codes() -> Tuple[int, ...]:
    return tuple(sorted(MEASURE_TYPES))


__all__ = ["MEASURE_TYPES", "known_codes", "name_for"]
