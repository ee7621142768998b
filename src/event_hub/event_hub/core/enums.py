from __future__ import annotations

from enum import Enum


class RegistrationState(str, Enum):
    """Result of looking up one user's registration for one event."""

    REGISTERED = "REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    UNKNOWN = "UNKNOWN"


class CounterChange(int, Enum):
    """Delta applied to an event's attendee counter."""

    INCREMENT = 1
    DECREMENT = -1
