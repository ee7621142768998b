from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_user_id, login_required
from ..core.enums import RegistrationState
from ..core.exceptions import EventNotFound, StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        try:
            events = container.event_service.list_events()
        except StoreError:
            logger.exception("Error loading events")
            flash("Error loading events", "danger")
            events = []
        return render_template("events/index.html", events=events)

    @app.route("/events/<event_id>", endpoint="event_detail")
    def event_detail(event_id: str):
        try:
            event = container.event_service.get_event(event_id)
        except (EventNotFound, StoreError):
            flash("Error loading event", "danger")
            return redirect(url_for("index"))

        state = container.registration_service.registration_state(event.event_id, current_user_id())
        if state is RegistrationState.UNKNOWN:
            flash("Could not check your registration for this event.", "warning")

        return render_template(
            "events/detail.html",
            event=event,
            state=state,
            is_registered=state is RegistrationState.REGISTERED,
        )

    @app.route("/events/new", methods=["GET", "POST"], endpoint="create_event")
    @login_required
    def create_event():
        if request.method == "POST":
            try:
                event = container.event_service.create_event(
                    owner_id=current_user_id(),
                    title=request.form.get("title", ""),
                    description=request.form.get("description", ""),
                    starts_at=request.form.get("starts_at", ""),
                    location=request.form.get("location", ""),
                    max_attendees=request.form.get("max_attendees"),
                    image_url=request.form.get("image_url"),
                )
                flash("Event created successfully", "success")
                return redirect(url_for("event_detail", event_id=event.event_id))
            except ValidationError as e:
                flash(str(e), "danger")
            except StoreError:
                logger.exception("Error creating event")
                flash("Error creating event", "danger")

        return render_template("events/create.html", form=request.form)
