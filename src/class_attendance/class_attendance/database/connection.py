from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import mysql.connector

DEFAULT_DATABASE = "class_attendance"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_settings(cls, db_config: Mapping[str, object]) -> "DBConfig":
        return cls(
            host=str(db_config.get("host") or "localhost"),
            port=int(db_config.get("port") or 3306),
            user=str(db_config.get("user") or "root"),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or DEFAULT_DATABASE),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Connection factory built once by the container and handed to every repository.

    Each operation opens its own short-lived connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self, *, with_database: bool = True):
        kwargs = {
            "host": self._config.host,
            "port": self._config.port,
            "user": self._config.user,
            "password": self._config.password,
            "use_pure": True,
        }
        if with_database:
            kwargs["database"] = self._config.database
        return mysql.connector.connect(**kwargs)
