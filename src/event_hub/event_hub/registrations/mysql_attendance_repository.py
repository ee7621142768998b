from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(self, *, event_id: str, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT event_id, user_id FROM event_attendees WHERE event_id=%s AND user_id=%s",
                (event_id, user_id),
            )
            return [AttendanceRecord(event_id=str(r["event_id"]), user_id=str(r["user_id"])) for r in fetchall(cur)]

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT event_id, user_id FROM event_attendees WHERE user_id=%s ORDER BY created_at ASC",
                (user_id,),
            )
            return [AttendanceRecord(event_id=str(r["event_id"]), user_id=str(r["user_id"])) for r in fetchall(cur)]

    def count_for_event(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM event_attendees WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def add(self, *, event_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # The composite primary key makes a duplicate insert a no-op.
            cur.execute(
                "INSERT IGNORE INTO event_attendees(event_id, user_id) VALUES(%s,%s)",
                (event_id, user_id),
            )
            return cur.rowcount > 0

    def remove(self, *, event_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM event_attendees WHERE event_id=%s AND user_id=%s",
                (event_id, user_id),
            )
            return cur.rowcount > 0
