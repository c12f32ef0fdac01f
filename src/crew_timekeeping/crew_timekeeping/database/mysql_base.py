from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
import structlog

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = structlog.get_logger(__name__)

# Server error code for a violated UNIQUE key.
ER_DUP_ENTRY = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on any error.

    Connector failures surface as :class:`StoreError` so callers never see
    driver-specific exception types. Domain errors raised inside the block
    are re-raised untouched after the rollback.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("db_connect_failed", error=str(e))
        raise StoreError(f"Could not connect to database: {e}") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("db_statement_failed", error=str(e), errno=getattr(e, "errno", None))
        raise StoreError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_duplicate_key(exc: BaseException, key_name: Optional[str] = None) -> bool:
    """True when ``exc`` (or its cause) is a duplicate-entry error, on ``key_name`` if given."""
    err = exc.__cause__ if isinstance(exc, StoreError) else exc
    return (
        isinstance(err, mysql.connector.IntegrityError)
        and getattr(err, "errno", None) == ER_DUP_ENTRY
        and (key_name is None or key_name in str(err))
    )


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
