from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, StoreError, ValidationError
from ..container import Container
from .service import SessionUser

logger = logging.getLogger(__name__)


def _safe_next(target: str | None) -> str:
    # Only same-site relative paths.
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("index")


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    def start_session(user: SessionUser, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["user_id"] = user.user_id
        session["email"] = user.email
        session["name"] = user.full_name

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            try:
                user = container.auth_service.authenticate(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                start_session(user, remember=bool(request.form.get("remember_me")))
                flash("Signed in successfully.", "success")
                return redirect(_safe_next(request.form.get("next")))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except StoreError:
                logger.exception("Sign in failed")
                flash("Could not sign in right now. Please try again.", "danger")

        return render_template("users/login.html", next=request.args.get("next", ""))

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            try:
                user = container.auth_service.sign_up(
                    email=request.form.get("email", ""),
                    full_name=request.form.get("full_name", ""),
                    password=request.form.get("password", ""),
                )
                start_session(user, remember=False)
                flash("Account created.", "success")
                return redirect(url_for("index"))
            except ValidationError as e:
                flash(str(e), "danger")
            except StoreError:
                logger.exception("Sign up failed")
                flash("Could not create the account right now. Please try again.", "danger")

        return render_template("users/signup.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("index"))
