from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _quietly(action, what: str) -> None:
    # Cleanup on a dead connection fails too; the original error is the one to report.
    try:
        action()
    except mysql.connector.Error as exc:
        logger.warning("Could not %s event store connection: %s", what, exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield `(conn, cursor)`; commit on success, roll back on error.

    Driver errors surface as StoreError so services never see mysql types.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Could not connect to the event store: %s", exc)
        raise StoreError("Event store unavailable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            _quietly(cur.close, "close cursor on")
    except mysql.connector.Error as exc:
        _quietly(conn.rollback, "roll back")
        logger.error("Event store call failed: %s", exc)
        raise StoreError(str(exc)) from exc
    except Exception:
        _quietly(conn.rollback, "roll back")
        raise
    finally:
        _quietly(conn.close, "close")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for `IN (...)`; callers must reject empty input."""
    return ", ".join(["%s"] * len(values))
