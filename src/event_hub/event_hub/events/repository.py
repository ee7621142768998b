from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import CounterChange
from .model import Event


class EventRepository(Protocol):
    """Event side of the event store.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_ordered_by_date(self) -> Sequence[Event]:
        raise NotImplementedError

    def list_by_owner(self, owner_id: str) -> Sequence[Event]:
        raise NotImplementedError

    def list_by_ids(self, event_ids: Sequence[str]) -> Sequence[Event]:
        raise NotImplementedError

    def create(self, event: Event) -> str:
        raise NotImplementedError

    def set_attendee_count(self, *, event_id: str, current_attendees: int) -> bool:
        raise NotImplementedError

    def adjust_attendee_count(self, *, event_id: str, change: CounterChange) -> Optional[int]:
        """Apply `change` atomically inside the store.

        Increments are refused at capacity and decrements at zero. Returns the
        new count, or None when the change was refused or the event is gone.
        """

        raise NotImplementedError
