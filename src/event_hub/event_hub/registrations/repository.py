from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def find(self, *, event_id: str, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_event(self, event_id: str) -> int:
        raise NotImplementedError

    def add(self, *, event_id: str, user_id: str) -> bool:
        """Insert the record. False when one already existed for the pair."""

        raise NotImplementedError

    def remove(self, *, event_id: str, user_id: str) -> bool:
        """Delete the record. False when there was nothing to delete."""

        raise NotImplementedError
