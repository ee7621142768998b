from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import AuthenticationRequired
from ..events.repository import EventRepository
from ..registrations.repository import AttendanceRepository
from .aggregation import aggregate_events, compute_attendance_rates, compute_monthly_distribution
from .model import Dashboard

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, events: EventRepository, attendance: AttendanceRepository):
        self._events = events
        self._attendance = attendance

    def build_dashboard(self, user_id: Optional[str], *, today: Optional[date] = None) -> Dashboard:
        if not user_id:
            raise AuthenticationRequired("Sign in to see your events")

        today = today or now_local().date()

        created = self._events.list_by_owner(user_id)
        attended_ids = [r.event_id for r in self._attendance.list_for_user(user_id)]
        events = aggregate_events(created, attended_ids, self._events.list_by_ids)

        logger.debug(
            "Dashboard for %s: %d created, %d attended, %d unique",
            user_id,
            len(created),
            len(attended_ids),
            len(events),
        )

        return Dashboard(
            events=events,
            attendance_rates=compute_attendance_rates(events),
            monthly_distribution=compute_monthly_distribution(events, today),
        )
