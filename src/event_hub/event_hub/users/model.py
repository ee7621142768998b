from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Domain entity: an account.

    Note: Plain data object, no database access here.
    """

    user_id: str
    email: str
    full_name: str
    password_hash: str
