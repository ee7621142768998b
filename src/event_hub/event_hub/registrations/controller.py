from __future__ import annotations

import logging

from flask import Flask, flash, redirect, request, url_for

from ..common.web import current_user_id
from ..core.exceptions import AuthenticationRequired, EventFull, EventNotFound, PartialUpdateError, StoreError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/events/<event_id>/registration", methods=["POST"], endpoint="toggle_registration")
    def toggle_registration(event_id: str):
        user_id = current_user_id()
        if not user_id:
            return redirect(url_for("login", next=url_for("event_detail", event_id=event_id)))

        try:
            event = container.event_service.get_event(event_id)
        except (EventNotFound, StoreError):
            flash("Error loading event", "danger")
            return redirect(url_for("index"))

        # The page posts the registration state it was rendered with.
        is_registered = request.form.get("is_registered") == "1"

        try:
            result = container.registration_service.toggle_registration(
                event, user_id, is_registered=is_registered
            )
        except AuthenticationRequired:
            return redirect(url_for("login", next=url_for("event_detail", event_id=event_id)))
        except EventFull as e:
            flash(str(e), "warning")
        except PartialUpdateError as e:
            flash(f"{e}. The attendee count may be out of date.", "warning")
        except StoreError:
            flash("Error updating registration", "danger")
        else:
            if result.is_registered:
                flash("Successfully registered for event", "success")
            else:
                flash("Successfully unregistered from event", "success")

        return redirect(url_for("event_detail", event_id=event_id))
