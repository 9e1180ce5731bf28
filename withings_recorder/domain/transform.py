from __future__ import annotations

from typing import Iterable

from ..models import RawMeasure, RawMeasureGroup, Sample, TransformResult
from ..errors import TransformError
from .catalog import name_for


def scaled_value(measure: RawMeasure) -> float:
    """Apply the base-10 unit exponent to the raw value."""

    if measure.unit < 0:
        # Dividing keeps decimal values like 7512e-3 exact where 10 ** -3 would not.
        return float(measure.value) / 10 ** -measure.unit
    return float(measure.value) * 10 ** measure.unit


def transform(groups: Iterable[RawMeasureGroup], *, strict: bool = False) -> TransformResult:
    """Convert measurement groups into named samples, preserving input order.

    Measures whose type code is not in the catalog are skipped and counted in
    ``TransformResult.unknown_codes``. With ``strict`` the first such code
    raises :class:`TransformError` instead.
    """

    result = TransformResult()
    for group in groups:
        for measure in group.measures:
            name = name_for(measure.type)
            if name is None:
                if strict:
                    raise TransformError(
                        f"Unknown measure type {measure.type} at {group.date}"
                    )
                result.unknown_codes[measure.type] += 1
                continue
            result.samples.append(
                Sample(
                    metric_name=name,
                    value=scaled_value(measure),
                    timestamp=group.date,
                )
            )
    return result


__all__ = ["scaled_value", "transform"]
