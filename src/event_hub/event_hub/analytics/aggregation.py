"""Pure helpers behind the personal dashboard.

Ordering is part of the contract here: dedup keeps the first copy it sees,
and day buckets come out in the order their first event appears.
"""
from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Sequence

from ..common.datetime_utils import end_of_month, start_of_month
from ..events.model import Event
from .model import AttendanceRate, DayCount


def aggregate_events(
    created_events: Iterable[Event],
    attended_event_ids: Sequence[str],
    resolve: Callable[[Sequence[str]], Iterable[Event]],
) -> list[Event]:
    """Created events followed by attended ones, unique by id.

    On a duplicate id the created copy is kept.
    """
    attended = resolve(list(attended_event_ids)) if attended_event_ids else []

    unique: dict[str, Event] = {}
    for event in [*created_events, *attended]:
        unique.setdefault(event.event_id, event)
    return list(unique.values())


def attendance_percentage(event: Event) -> float:
    # An event without capacity reports 0%.
    if event.max_attendees <= 0:
        return 0.0
    return 100.0 * event.current_attendees / event.max_attendees


def compute_attendance_rates(events: Iterable[Event]) -> list[AttendanceRate]:
    return [AttendanceRate(label=e.title, percentage=attendance_percentage(e)) for e in events]


def compute_monthly_distribution(events: Iterable[Event], reference: date) -> list[DayCount]:
    """Count events per day of the reference month, days with no events omitted."""
    month_start = start_of_month(reference)
    month_end = end_of_month(reference)

    counts: dict[int, int] = {}
    for event in events:
        if month_start <= event.starts_at <= month_end:
            day = event.starts_at.day
            counts[day] = counts.get(day, 0) + 1

    return [DayCount(day=day, count=count) for day, count in counts.items()]
