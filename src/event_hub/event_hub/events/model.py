from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Event:
    """Domain entity: a scheduled gathering.

    `current_attendees` is a cached count of the event's attendance records.
    """

    event_id: str
    title: str
    description: str
    starts_at: datetime
    location: str
    owner_id: str
    max_attendees: int
    current_attendees: int = 0
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_full(self) -> bool:
        return self.current_attendees >= self.max_attendees

    @property
    def spots_left(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)
