from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, redirect, request, session, url_for


def current_user_id() -> Optional[str]:
    return session.get("user_id")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user_id():
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login", next=request.path))
        return view(*args, **kwargs)

    return wrapper
