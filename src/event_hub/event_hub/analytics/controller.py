from __future__ import annotations

import logging

from flask import Flask, flash, render_template

from ..common.web import current_user_id, login_required
from ..core.exceptions import StoreError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/my-events", endpoint="my_events")
    @login_required
    def my_events():
        try:
            dashboard = container.dashboard_service.build_dashboard(current_user_id())
        except StoreError:
            logger.exception("Error fetching events")
            flash("Error fetching events", "danger")
            dashboard = None
        return render_template("events/my_events.html", dashboard=dashboard)
