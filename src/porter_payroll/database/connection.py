from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict, *, pool_size: int = 5) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(pool_size),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-scoped connection pool.

    Built once by the container, opened at startup and closed at shutdown.
    Repositories borrow a pooled connection per operation.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def config(self) -> DBConfig:
        return self._config

    def open(self) -> None:
        if self._pool is not None:
            return
        self._pool = pooling.MySQLConnectionPool(
            pool_name="porter_payroll",
            pool_size=self._config.pool_size,
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
        logger.info("Database pool ready (%s, size=%d)", self._config.describe(), self._config.pool_size)

    def connect(self):
        if self._pool is None:
            self.open()
        return self._pool.get_connection()

    def close(self) -> None:
        """Disconnect every idle pooled connection and drop the pool."""
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        # mysql-connector has no public pool shutdown.
        closed = pool._remove_connections()
        logger.info("Database pool closed (%d idle connections)", closed)
