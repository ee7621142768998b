from __future__ import annotations

import calendar
from datetime import date, datetime, time

from ..core.constants import EVENT_DATETIME_FORMAT
from ..core.exceptions import ValidationError


def parse_event_datetime(value: str) -> datetime:
    """Parse the `YYYY-MM-DDTHH:MM` value posted by the create form."""
    try:
        return datetime.strptime(value.strip(), EVENT_DATETIME_FORMAT)
    except (AttributeError, ValueError):
        raise ValidationError("Invalid event date")


def start_of_month(reference: date) -> datetime:
    return datetime.combine(reference.replace(day=1), time.min)


def end_of_month(reference: date) -> datetime:
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return datetime.combine(reference.replace(day=last_day), time.max)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
