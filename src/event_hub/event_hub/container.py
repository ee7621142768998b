from __future__ import annotations

from dataclasses import dataclass

from .analytics.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .registrations.mysql_attendance_repository import MySQLAttendanceRepository
from .registrations.repository import AttendanceRepository
from .registrations.service import RegistrationService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    events_repo: EventRepository
    attendance_repo: AttendanceRepository
    users_repo: UserRepository

    auth_service: AuthService
    event_service: EventService
    registration_service: RegistrationService
    dashboard_service: DashboardService


def build_services(
    *,
    events_repo: EventRepository,
    attendance_repo: AttendanceRepository,
    users_repo: UserRepository,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    return Container(
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
        event_service=EventService(events_repo),
        registration_service=RegistrationService(attendance_repo, events_repo),
        dashboard_service=DashboardService(events_repo, attendance_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        events_repo=MySQLEventRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        users_repo=MySQLUserRepository(conn),
    )
