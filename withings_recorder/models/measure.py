from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RawMeasure(BaseModel):
    """A single typed value inside a Withings measurement group."""

    model_config = ConfigDict(extra="ignore")

    type: int = Field(..., description="Withings measure type code")
    value: int | float = Field(..., description="Unscaled measurement value")
    unit: int = Field(..., description="Base-10 exponent applied to value")


class RawMeasureGroup(BaseModel):
    """One timestamped batch of measures as returned by ``getmeas``."""

    model_config = ConfigDict(extra="ignore")

    date: int = Field(..., description="Measurement time as epoch seconds")
    measures: List[RawMeasure] = Field(default_factory=list)


class Sample(BaseModel):
    """A named, unit-scaled measurement ready for the time-series store."""

    metric_name: str
    value: float
    timestamp: int

    def describe(self) -> str:
        moment = datetime.fromtimestamp(self.timestamp).isoformat(sep=" ")
        return f"{moment} {self.metric_name} = {self.value}"


class FetchWindow(BaseModel):
    """Inclusive epoch-second bounds of a measurement query."""

    startdate: int
    enddate: int


@dataclass
class TransformResult:
    samples: List[Sample] = field(default_factory=list)
    unknown_codes: Counter[int] = field(default_factory=Counter)

    @property
    def unknown_total(self) -> int:
        return sum(self.unknown_codes.values())


@dataclass
class RunReport:
    """Outcome summary of one ``record-status`` run."""

    attempts: int
    samples: List[Sample] = field(default_factory=list)
    unknown_codes: Counter[int] = field(default_factory=Counter)
    written: bool = False
    refreshed: bool = False
