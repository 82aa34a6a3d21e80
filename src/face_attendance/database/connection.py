from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "face_attendance"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    def connect_args(self, *, with_database: bool = True) -> Dict[str, Any]:
        args: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
        }
        if with_database:
            args["database"] = self.database
        return args


def open_connection(config: DBConfig, *, with_database: bool = True, **extra: Any):
    return mysql.connector.connect(**config.connect_args(with_database=with_database), **extra)


class DatabaseConnection:
    """Connection factory shared by the MySQL repositories.

    Each unit of work opens and closes its own connection; there is no pool.
    One factory is kept per distinct DBConfig.
    """

    _instances: Dict[DBConfig, "DatabaseConnection"] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        instance: Optional[DatabaseConnection] = cls._instances.get(config)
        if instance is None:
            instance = cls._instances[config] = cls(config)
        return instance

    def connect(self):
        return open_connection(self._config)
