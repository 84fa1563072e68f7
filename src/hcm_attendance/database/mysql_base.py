from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection
from .transaction import TransactionManager

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    shared = conn_factory.active
    if shared is not None:
        # Inside MySQLTransactionManager.atomic(): the transaction owns commit/rollback.
        cur = shared.cursor(dictionary=dictionary)
        try:
            yield shared, cur
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
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


class MySQLTransactionManager(TransactionManager):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._conn_factory.active is not None:
            # Nested blocks join the outer transaction.
            yield
            return

        conn = self._conn_factory.connect()
        conn.start_transaction()
        self._conn_factory.bind(conn)
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._conn_factory.bind(None)
            conn.close()


@contextmanager
def named_lock(conn_factory: DatabaseConnection, name: str, *, timeout: int) -> Iterator[bool]:
    """MySQL advisory lock held on a dedicated connection for the block.

    Yields whether the lock was acquired within ``timeout`` seconds.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, int(timeout)))
            row = cur.fetchone()
            acquired = bool(row and row[0] == 1)
            try:
                yield acquired
            finally:
                if acquired:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
        finally:
            cur.close()
    finally:
        conn.close()
