"""
Database services.
"""
from typing import List
from .base import ServiceBuilder


class DatabaseService(ServiceBuilder):
    """
    Shared defaults for database services.
    """
    GROUP = "database"
    USERNAME = "admin"
    PASSWORD = "root"
    DATABASE = "database"
    DATA_DIR = ""

    def volumes(self) -> List[str]:
        return [f"{self.get_name()}-data:{self.DATA_DIR}"]


class MysqlService(DatabaseService):
    KIND = "mysql"
    IMAGE = "mysql"
    DEFAULT_VERSION = "5.6"
    DATA_DIR = "/var/lib/mysql"

    def ports(self) -> List[int]:
        return [3306]

    def environment(self) -> List[str]:
        return [
            f"MYSQL_USER={self.USERNAME}",
            f"MYSQL_PASSWORD={self.PASSWORD}",
            f"MYSQL_DATABASE={self.DATABASE}",
            f"MYSQL_ROOT_PASSWORD={self.PASSWORD}",
        ]


class MariadbService(MysqlService):
    KIND = "mariadb"
    IMAGE = "mariadb"
    DEFAULT_VERSION = "10.1"


class PostgresService(DatabaseService):
    KIND = "postgres"
    IMAGE = "postgres"
    DEFAULT_VERSION = "9.6"
    DATA_DIR = "/var/lib/postgresql/data"

    def ports(self) -> List[int]:
        return [5432]

    def environment(self) -> List[str]:
        return [
            f"POSTGRES_USER={self.USERNAME}",
            f"POSTGRES_PASSWORD={self.PASSWORD}",
            f"POSTGRES_DB={self.DATABASE}",
        ]
