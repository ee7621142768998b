from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from ..common.datetime_utils import parse_event_datetime
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import MIN_CAPACITY
from ..core.exceptions import AuthenticationRequired, EventNotFound
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Use cases: browse events, open one event, create an event."""

    def __init__(self, events: EventRepository):
        self._events = events

    def list_events(self) -> Sequence[Event]:
        return self._events.list_ordered_by_date()

    def get_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id) if event_id else None
        if not event:
            raise EventNotFound(f"Event {event_id!r} not found")
        return event

    def create_event(
        self,
        *,
        owner_id: Optional[str],
        title: str,
        description: str,
        starts_at: str,
        location: str,
        max_attendees,
        image_url: Optional[str] = None,
    ) -> Event:
        if not owner_id:
            raise AuthenticationRequired("Sign in to create events")

        event = Event(
            event_id=str(uuid.uuid4()),
            title=require_non_empty(title, "Title"),
            description=(description or "").strip(),
            starts_at=parse_event_datetime(starts_at),
            location=require_non_empty(location, "Location"),
            owner_id=owner_id,
            max_attendees=require_positive_int(max_attendees, "Maximum attendees", MIN_CAPACITY),
            current_attendees=0,
            image_url=(image_url or "").strip() or None,
        )
        self._events.create(event)
        logger.info("Event %s created by %s", event.event_id, owner_id)
        return event
