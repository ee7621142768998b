from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..core.enums import CounterChange, RegistrationState
from ..core.exceptions import AuthenticationRequired, EventFull, EventNotFound, PartialUpdateError, StoreError
from ..events.model import Event
from ..events.repository import EventRepository
from .model import RegistrationResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _partial_message(change: CounterChange) -> str:
    if change is CounterChange.INCREMENT:
        return "Registration saved but the attendee count was not updated"
    return "Registration removed but the attendee count was not updated"


class RegistrationService:
    """Use case: register and unregister a user for an event.

    A toggle is two store calls, the attendance record first and the attendee
    counter second. They are not one transaction. The counter step is an
    atomic conditional update in the store, so concurrent toggles cannot lose
    increments, but a failure between the two steps leaves record and counter
    apart. That case raises PartialUpdateError and is never retried here.
    """

    def __init__(self, attendance: AttendanceRepository, events: EventRepository):
        self._attendance = attendance
        self._events = events

    def registration_state(self, event_id: Optional[str], user_id: Optional[str]) -> RegistrationState:
        if not event_id or not user_id:
            return RegistrationState.NOT_REGISTERED

        try:
            records = self._attendance.find(event_id=event_id, user_id=user_id)
        except StoreError:
            logger.exception("Error checking registration of %s for event %s", user_id, event_id)
            return RegistrationState.UNKNOWN

        return RegistrationState.REGISTERED if records else RegistrationState.NOT_REGISTERED

    def check_registration(self, event_id: Optional[str], user_id: Optional[str]) -> bool:
        """True iff a record exists for the pair. Lookup failures count as not registered."""
        return self.registration_state(event_id, user_id) is RegistrationState.REGISTERED

    def toggle_registration(self, event: Event, user_id: Optional[str], *, is_registered: bool) -> RegistrationResult:
        """Flip the caller's registration based on the caller's last known state.

        `event` is the snapshot the caller already holds; it is not re-read
        before deciding.
        """
        if not user_id:
            raise AuthenticationRequired("Sign in to register for events")

        if is_registered:
            return self._unregister(event, user_id)

        if event.current_attendees >= event.max_attendees:
            raise EventFull("Event is full")
        return self._register(event, user_id)

    def reconcile_attendee_count(self, event_id: str) -> int:
        """Reset the cached counter to the number of attendance records."""
        total = self._attendance.count_for_event(event_id)
        if not self._events.set_attendee_count(event_id=event_id, current_attendees=total):
            raise EventNotFound(f"Event {event_id!r} not found")
        logger.info("Event %s attendee count reconciled to %d", event_id, total)
        return total

    def _register(self, event: Event, user_id: str) -> RegistrationResult:
        try:
            inserted = self._attendance.add(event_id=event.event_id, user_id=user_id)
        except StoreError:
            logger.exception("Error registering %s for event %s", user_id, event.event_id)
            raise

        if not inserted:
            logger.warning("User %s was already registered for event %s; counter untouched", user_id, event.event_id)
            return RegistrationResult(is_registered=True, event=event, record_changed=False, counter_changed=False)

        count = self._adjust_counter(event, user_id, CounterChange.INCREMENT)
        return RegistrationResult(
            is_registered=True,
            event=replace(event, current_attendees=count),
            record_changed=True,
            counter_changed=True,
        )

    def _unregister(self, event: Event, user_id: str) -> RegistrationResult:
        try:
            removed = self._attendance.remove(event_id=event.event_id, user_id=user_id)
        except StoreError:
            logger.exception("Error unregistering %s from event %s", user_id, event.event_id)
            raise

        if not removed:
            logger.warning("User %s was not registered for event %s; counter untouched", user_id, event.event_id)
            return RegistrationResult(is_registered=False, event=event, record_changed=False, counter_changed=False)

        count = self._adjust_counter(event, user_id, CounterChange.DECREMENT)
        return RegistrationResult(
            is_registered=False,
            event=replace(event, current_attendees=count),
            record_changed=True,
            counter_changed=True,
        )

    def _adjust_counter(self, event: Event, user_id: str, change: CounterChange) -> int:
        try:
            count = self._events.adjust_attendee_count(event_id=event.event_id, change=change)
        except StoreError as exc:
            logger.error(
                "Attendance record for %s on event %s changed but the counter update failed: %s",
                user_id,
                event.event_id,
                exc,
            )
            raise PartialUpdateError(
                _partial_message(change),
                event_id=event.event_id,
                user_id=user_id,
                record_changed=True,
                counter_changed=False,
            ) from exc

        if count is None:
            logger.error(
                "Attendance record for %s on event %s changed but the store refused the %s",
                user_id,
                event.event_id,
                change.name.lower(),
            )
            raise PartialUpdateError(
                _partial_message(change),
                event_id=event.event_id,
                user_id=user_id,
                record_changed=True,
                counter_changed=False,
            )
        return count
