from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector.constants import ClientFlag


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "hcm_db")),
        )


class DatabaseConnection:
    """DB connection factory.

    Short-lived connections per operation, except inside a transaction where the
    calling thread shares one connection (see ``mysql_base.MySQLTransactionManager``).
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            # rowcount must report changed rows, not matched rows (guarded upserts rely on it)
            client_flags=[-ClientFlag.FOUND_ROWS],
        )

    @property
    def active(self):
        """Connection of the transaction open on this thread, if any."""
        return getattr(self._local, "conn", None)

    def bind(self, conn: Optional[object]) -> None:
        self._local.conn = conn
