from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import CounterChange
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Event
from .repository import EventRepository

_COLUMNS = """
    event_id, title, description, starts_at, location, owner_id,
    image_url, max_attendees, current_attendees, created_at
"""


def _to_event(r: dict) -> Event:
    return Event(
        event_id=str(r["event_id"]),
        title=r["title"],
        description=r.get("description") or "",
        starts_at=r["starts_at"],
        location=r["location"],
        owner_id=str(r["owner_id"]),
        image_url=r.get("image_url"),
        max_attendees=int(r["max_attendees"]),
        current_attendees=int(r.get("current_attendees") or 0),
        created_at=r.get("created_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_ordered_by_date(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY starts_at ASC")
            return [_to_event(r) for r in fetchall(cur)]

    def list_by_owner(self, owner_id: str) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE owner_id=%s ORDER BY starts_at ASC",
                (owner_id,),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_by_ids(self, event_ids: Sequence[str]) -> Sequence[Event]:
        ids = list(event_ids)
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE event_id IN ({in_clause(ids)}) ORDER BY starts_at ASC",
                tuple(ids),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def create(self, event: Event) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(event_id, title, description, starts_at, location, owner_id,
                                   image_url, max_attendees, current_attendees)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.event_id,
                    event.title,
                    event.description,
                    event.starts_at,
                    event.location,
                    event.owner_id,
                    event.image_url,
                    int(event.max_attendees),
                    int(event.current_attendees),
                ),
            )
            return event.event_id

    def set_attendee_count(self, *, event_id: str, current_attendees: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE events SET current_attendees=%s WHERE event_id=%s",
                (int(current_attendees), event_id),
            )
            # rowcount is 0 when the value did not change, so confirm existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM events WHERE event_id=%s", (event_id,))
            return fetchone(cur) is not None

    def adjust_attendee_count(self, *, event_id: str, change: CounterChange) -> Optional[int]:
        if change is CounterChange.INCREMENT:
            guard = "current_attendees < max_attendees"
        else:
            guard = "current_attendees > 0"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE events
                SET current_attendees = current_attendees + %s
                WHERE event_id=%s AND {guard}
                """,
                (int(change.value), event_id),
            )
            if cur.rowcount == 0:
                return None
            cur.execute("SELECT current_attendees FROM events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return int(r["current_attendees"]) if r else None
