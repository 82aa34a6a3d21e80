from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode, errors

from ..core.exceptions import StorageFailureError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Connection + cursor for one unit of work; commits on success.

    Driver errors leave as StorageFailureError with the driver error chained.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise StorageFailureError(f"Database unavailable: {e}", cause=e) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise StorageFailureError(f"Database error: {e}", cause=e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(error: BaseException) -> bool:
    return isinstance(error, errors.IntegrityError) and getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY
