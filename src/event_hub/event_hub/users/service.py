from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    email: str
    full_name: str


class AuthService:
    """Use cases: sign up and sign in."""

    def __init__(self, users: UserRepository):
        self._users = users

    def sign_up(self, *, email: str, full_name: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = self._users.create_user(
            user_id=str(uuid.uuid4()),
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
        )
        logger.info("Account %s created", user_id)
        return SessionUser(user_id=user_id, email=email, full_name=full_name)

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, email=user.email, full_name=user.full_name)
