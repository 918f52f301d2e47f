"""Database dialects and the driver names they are reached through."""

from __future__ import annotations

from enum import Enum


class Dialect(str, Enum):
    """A database dialect supported for tracking migration versions."""

    CUSTOM = ""
    CLICKHOUSE = "clickhouse"
    MSSQL = "mssql"
    MYSQL = "mysql"
    POSTGRES = "postgres"
    REDSHIFT = "redshift"
    SQLITE3 = "sqlite3"
    STARROCKS = "starrocks"
    TIDB = "tidb"
    TURSO = "turso"
    VERTICA = "vertica"
    YDB = "ydb"


_ALIASES = {
    "postgres": Dialect.POSTGRES,
    "pgx": Dialect.POSTGRES,
    "mysql": Dialect.MYSQL,
    "sqlite3": Dialect.SQLITE3,
    "sqlite": Dialect.SQLITE3,
    "mssql": Dialect.MSSQL,
    "azuresql": Dialect.MSSQL,
    "sqlserver": Dialect.MSSQL,
    "redshift": Dialect.REDSHIFT,
    "tidb": Dialect.TIDB,
    "clickhouse": Dialect.CLICKHOUSE,
    "vertica": Dialect.VERTICA,
    "ydb": Dialect.YDB,
    "turso": Dialect.TURSO,
    "starrocks": Dialect.STARROCKS,
}

_DRIVER_FOR = {
    "mssql": "sqlserver",
    "tidb": "mysql",
    "turso": "libsql",
    "sqlite3": "sqlite",
    "postgres": "pgx",
    "redshift": "pgx",
    "starrocks": "mysql",
}

_SUPPORTED_DRIVERS = frozenset(
    {
        "postgres",
        "pgx",
        "sqlite3",
        "sqlite",
        "mysql",
        "sqlserver",
        "clickhouse",
        "vertica",
        "azuresql",
        "ydb",
        "libsql",
        "starrocks",
    }
)


def parse_dialect(name: str) -> Dialect:
    """Return the dialect for a dialect or driver name, or raise ValueError."""
    try:
        return _ALIASES[name]
    except KeyError:
        raise ValueError(f'"{name}": unknown dialect') from None


def resolve_driver(driver: str) -> str:
    """Map a dialect or driver name to the driver name used to open a connection.

    Raises ValueError when the name is not a known dialect or driver.
    """
    parse_dialect(driver)
    resolved = _DRIVER_FOR.get(driver, driver)
    if resolved not in _SUPPORTED_DRIVERS:
        raise ValueError(f"unsupported driver {resolved}")
    return resolved