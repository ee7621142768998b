from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _to_user(r: dict) -> User:
    return User(
        user_id=str(r["user_id"]),
        email=r["email"],
        full_name=r["full_name"],
        password_hash=r["password_hash"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, full_name, password_hash FROM users WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            return _to_user(r) if r else None

    def create_user(self, *, user_id: str, email: str, full_name: str, password_hash: str) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(user_id, email, full_name, password_hash) VALUES(%s,%s,%s,%s)",
                (user_id, email, full_name, password_hash),
            )
            return user_id
