from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..events.model import Event


@dataclass(frozen=True)
class AttendanceRate:
    label: str
    percentage: float


@dataclass(frozen=True)
class DayCount:
    day: int
    count: int


@dataclass(frozen=True)
class Dashboard:
    """Read-model for the personal dashboard page."""

    events: Sequence[Event]
    attendance_rates: Sequence[AttendanceRate]
    monthly_distribution: Sequence[DayCount]
