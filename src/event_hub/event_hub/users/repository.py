from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, user_id: str, email: str, full_name: str, password_hash: str) -> str:
        raise NotImplementedError
