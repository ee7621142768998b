from __future__ import annotations

from dataclasses import dataclass

from ..events.model import Event


@dataclass(frozen=True)
class AttendanceRecord:
    """One user's registration for one event. The pair is the natural key."""

    event_id: str
    user_id: str


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registration toggle.

    `record_changed` and `counter_changed` report what each store step did.
    Both are False when the caller's state was stale and nothing needed doing.
    """

    is_registered: bool
    event: Event
    record_changed: bool
    counter_changed: bool
