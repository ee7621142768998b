"""Reset every event's attendee counter to its number of attendance records.

Run after a registration reported that the attendee count was not updated.
"""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.event_hub.event_hub.container import build_container


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    changed = 0
    for event in container.event_service.list_events():
        total = container.registration_service.reconcile_attendee_count(event.event_id)
        if total != event.current_attendees:
            changed += 1
            print(f"{event.event_id}: {event.current_attendees} -> {total}")

    print(f"OK: reconciled attendee counts ({changed} changed)")


if __name__ == "__main__":
    main()
