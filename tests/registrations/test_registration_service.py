from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.event_hub.event_hub.core.enums import CounterChange, RegistrationState
from src.event_hub.event_hub.core.exceptions import (
    AuthenticationRequired,
    EventFull,
    EventNotFound,
    PartialUpdateError,
    StoreError,
)
from src.event_hub.event_hub.events.model import Event
from src.event_hub.event_hub.registrations.model import AttendanceRecord
from src.event_hub.event_hub.registrations.service import RegistrationService


class InMemoryAttendance:
    def __init__(self, *pairs: tuple[str, str]):
        self.records: set[tuple[str, str]] = set(pairs)
        self.find_calls = 0

    def find(self, *, event_id: str, user_id: str):
        self.find_calls += 1
        if (event_id, user_id) in self.records:
            return [AttendanceRecord(event_id=event_id, user_id=user_id)]
        return []

    def count_for_event(self, event_id: str) -> int:
        return sum(1 for e, _ in self.records if e == event_id)

    def add(self, *, event_id: str, user_id: str) -> bool:
        if (event_id, user_id) in self.records:
            return False
        self.records.add((event_id, user_id))
        return True

    def remove(self, *, event_id: str, user_id: str) -> bool:
        if (event_id, user_id) not in self.records:
            return False
        self.records.discard((event_id, user_id))
        return True


class BrokenAttendance(InMemoryAttendance):
    def find(self, *, event_id: str, user_id: str):
        raise StoreError("connection reset")

    def add(self, *, event_id: str, user_id: str) -> bool:
        raise StoreError("connection reset")


class InMemoryEvents:
    def __init__(self, *events: Event):
        self.events = {e.event_id: e for e in events}
        self.adjust_calls: list[CounterChange] = []

    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self.events.get(event_id)

    def adjust_attendee_count(self, *, event_id: str, change: CounterChange) -> Optional[int]:
        self.adjust_calls.append(change)
        event = self.events.get(event_id)
        if not event:
            return None
        count = event.current_attendees + change.value
        if count < 0 or count > event.max_attendees:
            return None
        self.events[event_id] = replace(event, current_attendees=count)
        return count

    def set_attendee_count(self, *, event_id: str, current_attendees: int) -> bool:
        event = self.events.get(event_id)
        if not event:
            return False
        self.events[event_id] = replace(event, current_attendees=current_attendees)
        return True


class BrokenCounterEvents(InMemoryEvents):
    def adjust_attendee_count(self, *, event_id: str, change: CounterChange) -> Optional[int]:
        self.adjust_calls.append(change)
        raise StoreError("timeout")


def make_event(*, current: int = 4, capacity: int = 10, event_id: str = "evt-1") -> Event:
    return Event(
        event_id=event_id,
        title="Python Meetup",
        description="Talks",
        starts_at=datetime(2024, 7, 3, 18, 30),
        location="Hall",
        owner_id="owner-1",
        max_attendees=capacity,
        current_attendees=current,
    )


def test_check_registration_true_only_for_exact_pair():
    svc = RegistrationService(InMemoryAttendance(("evt-1", "u1")), InMemoryEvents())

    assert svc.check_registration("evt-1", "u1") is True
    assert svc.check_registration("evt-1", "u2") is False
    assert svc.check_registration("evt-2", "u1") is False


def test_check_registration_without_user_skips_store():
    attendance = InMemoryAttendance(("evt-1", "u1"))
    svc = RegistrationService(attendance, InMemoryEvents())

    assert svc.check_registration("evt-1", None) is False
    assert svc.check_registration(None, "u1") is False
    assert attendance.find_calls == 0


def test_lookup_failure_fails_open_but_state_is_unknown(caplog):
    svc = RegistrationService(BrokenAttendance(), InMemoryEvents())

    with caplog.at_level(logging.ERROR):
        assert svc.check_registration("evt-1", "u1") is False
        assert svc.registration_state("evt-1", "u1") is RegistrationState.UNKNOWN

    assert "Error checking registration" in caplog.text


def test_register_inserts_record_and_increments_counter():
    event = make_event(current=4, capacity=10)
    attendance = InMemoryAttendance()
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    result = svc.toggle_registration(event, "u1", is_registered=False)

    assert result.is_registered is True
    assert result.event.current_attendees == 5
    assert result.record_changed and result.counter_changed
    assert attendance.records == {("evt-1", "u1")}
    assert events.events["evt-1"].current_attendees == 5
    assert event.current_attendees == 4


def test_register_rejects_full_event_without_mutation():
    event = make_event(current=10, capacity=10)
    attendance = InMemoryAttendance()
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    with pytest.raises(EventFull):
        svc.toggle_registration(event, "u1", is_registered=False)

    assert attendance.records == set()
    assert events.adjust_calls == []
    assert events.events["evt-1"].current_attendees == 10


def test_zero_capacity_event_is_always_full():
    event = make_event(current=0, capacity=0)
    svc = RegistrationService(InMemoryAttendance(), InMemoryEvents(event))

    with pytest.raises(EventFull):
        svc.toggle_registration(event, "u1", is_registered=False)


def test_toggle_without_user_requires_authentication():
    event = make_event()
    attendance = InMemoryAttendance()
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    with pytest.raises(AuthenticationRequired):
        svc.toggle_registration(event, None, is_registered=False)

    assert attendance.records == set()
    assert events.adjust_calls == []


def test_unregister_deletes_record_and_decrements_once():
    event = make_event(current=5)
    attendance = InMemoryAttendance(("evt-1", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    result = svc.toggle_registration(event, "u1", is_registered=True)

    assert result.is_registered is False
    assert result.event.current_attendees == 4
    assert attendance.records == set()
    assert events.events["evt-1"].current_attendees == 4


def test_unregister_twice_with_stale_state_does_not_double_count():
    event = make_event(current=5)
    attendance = InMemoryAttendance(("evt-1", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    svc.toggle_registration(event, "u1", is_registered=True)
    # Second tab still believes the user is registered and holds the old snapshot.
    stale = svc.toggle_registration(event, "u1", is_registered=True)

    assert stale.is_registered is False
    assert stale.record_changed is False
    assert stale.counter_changed is False
    assert events.adjust_calls == [CounterChange.DECREMENT]
    assert events.events["evt-1"].current_attendees == 4


def test_unregister_then_register_with_fresh_state():
    event = make_event(current=5)
    attendance = InMemoryAttendance(("evt-1", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    first = svc.toggle_registration(event, "u1", is_registered=True)
    second = svc.toggle_registration(first.event, "u1", is_registered=first.is_registered)

    assert second.is_registered is True
    assert second.event.current_attendees == 5
    assert attendance.records == {("evt-1", "u1")}


def test_register_with_stale_state_keeps_counter():
    event = make_event(current=5)
    attendance = InMemoryAttendance(("evt-1", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    result = svc.toggle_registration(event, "u1", is_registered=False)

    assert result.is_registered is True
    assert result.record_changed is False
    assert events.adjust_calls == []
    assert events.events["evt-1"].current_attendees == 5


def test_counter_never_goes_below_zero():
    # Counter already drifted to 0 while a record still exists.
    event = make_event(current=0)
    attendance = InMemoryAttendance(("evt-1", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    with pytest.raises(PartialUpdateError) as excinfo:
        svc.toggle_registration(event, "u1", is_registered=True)

    assert excinfo.value.record_changed is True
    assert str(excinfo.value) == "Registration removed but the attendee count was not updated"
    assert excinfo.value.counter_changed is False
    assert events.events["evt-1"].current_attendees == 0


def test_counter_failure_after_record_insert_is_partial(caplog):
    event = make_event(current=4)
    attendance = InMemoryAttendance()
    events = BrokenCounterEvents(event)
    svc = RegistrationService(attendance, events)

    with caplog.at_level(logging.ERROR), pytest.raises(PartialUpdateError) as excinfo:
        svc.toggle_registration(event, "u1", is_registered=False)

    err = excinfo.value
    assert isinstance(err, StoreError)
    assert (err.event_id, err.user_id) == ("evt-1", "u1")
    assert err.record_changed is True
    assert err.counter_changed is False
    assert str(err) == "Registration saved but the attendee count was not updated"
    assert attendance.records == {("evt-1", "u1")}
    assert "counter update failed" in caplog.text


def test_record_step_failure_is_plain_store_error():
    event = make_event(current=4)
    events = InMemoryEvents(event)
    svc = RegistrationService(BrokenAttendance(), events)

    with pytest.raises(StoreError) as excinfo:
        svc.toggle_registration(event, "u1", is_registered=False)

    assert not isinstance(excinfo.value, PartialUpdateError)
    assert events.adjust_calls == []


def test_reconcile_resets_counter_to_record_count():
    event = make_event(current=7)
    attendance = InMemoryAttendance(("evt-1", "u1"), ("evt-1", "u2"), ("evt-2", "u1"))
    events = InMemoryEvents(event)
    svc = RegistrationService(attendance, events)

    assert svc.reconcile_attendee_count("evt-1") == 2
    assert events.events["evt-1"].current_attendees == 2


def test_reconcile_missing_event():
    svc = RegistrationService(InMemoryAttendance(), InMemoryEvents())

    with pytest.raises(EventNotFound):
        svc.reconcile_attendee_count("nope")
