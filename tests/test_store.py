import sqlite3
from datetime import datetime, timedelta

import pytest

from goose.database.querier import Querier
from goose.database.store import (
    GetMigrationResult,
    InsertRequest,
    ListMigrationsResult,
    SqlStore,
    UnsupportedError,
    VersionNotFoundError,
    new_store_from_querier,
)

TABLE = "test_goose_db_version"


class SqliteQuerier(Querier):
    def create_table(self, table_name):
        return (
            f"CREATE TABLE {table_name} ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "version_id INTEGER NOT NULL, "
            "is_applied INTEGER NOT NULL, "
            "tstamp TIMESTAMP DEFAULT (datetime('now')))"
        )

    def insert_version(self, table_name):
        return f"INSERT INTO {table_name} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, table_name):
        return f"DELETE FROM {table_name} WHERE version_id=?"

    def get_migration_by_version(self, table_name):
        return (
            f"SELECT tstamp, is_applied FROM {table_name} "
            "WHERE version_id=? ORDER BY tstamp DESC LIMIT 1"
        )

    def list_migrations(self, table_name):
        return f"SELECT version_id, is_applied FROM {table_name} ORDER BY id DESC"

    def get_latest_version(self, table_name):
        return f"SELECT MAX(version_id) FROM {table_name}"


class SqliteQuerierExtended(SqliteQuerier):
    def table_exists(self, table_name):
        return (
            "SELECT EXISTS (SELECT 1 FROM sqlite_master "
            f"WHERE type='table' AND name='{table_name}')"
        )


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    yield connection
    connection.close()


def test_invalid_arguments():
    with pytest.raises(ValueError, match="table name must not be empty"):
        new_store_from_querier("", SqliteQuerier())
    with pytest.raises(ValueError, match="querier must not be nil"):
        new_store_from_querier("foo", None)


def test_store_lifecycle(conn):
    store = new_store_from_querier(TABLE, SqliteQuerier())
    assert store.table_name == TABLE

    with conn:
        store.create_version_table(conn)
    with pytest.raises(RuntimeError, match=f"table {TABLE} already exists") as excinfo:
        store.create_version_table(conn)
    assert isinstance(excinfo.value.__cause__, sqlite3.OperationalError)

    with pytest.raises(VersionNotFoundError):
        store.get_latest_version(conn)
    assert store.list_migrations(conn) == []

    for i in range(6):
        cursor = conn.cursor()
        store.insert(cursor, InsertRequest(version=i))
        assert store.get_latest_version(cursor) == i
        cursor.close()

    result = store.list_migrations(conn)
    assert len(result) == 6
    assert [r.version for r in result] == [5 - i for i in range(6)]
    assert all(r.is_applied for r in result)

    for i in range(5, 2, -1):
        store.delete(conn, i)
        assert store.get_latest_version(conn) == i - 1

    result = store.list_migrations(conn)
    assert [r.version for r in result] == [2, 1, 0]

    now = datetime.utcnow()
    for i in range(3):
        migration = store.get_migration(conn, i)
        assert migration.is_applied is True
        assert abs(now - migration.timestamp) < timedelta(minutes=5)

    with conn:
        cursor = conn.cursor()
        store.delete(cursor, 2)
        assert store.get_latest_version(cursor) == 1
        cursor.close()
    cursor = conn.cursor()
    store.delete(cursor, 1)
    assert store.get_latest_version(cursor) == 0
    cursor.close()
    store.delete(conn, 0)
    with pytest.raises(VersionNotFoundError):
        store.get_latest_version(conn)

    assert store.list_migrations(conn) == []
    with pytest.raises(VersionNotFoundError):
        store.get_migration(conn, 0)


def test_list_migrations_order(tmp_path):
    connection = sqlite3.connect(tmp_path / "sql_embed.db")
    try:
        store = new_store_from_querier("foo", SqliteQuerier())
        store.create_version_table(connection)
        for version in (1, 3, 2):
            store.insert(connection, InsertRequest(version=version))
        result = store.list_migrations(connection)
        assert [r.version for r in result] == [2, 3, 1]
        assert result[0] == ListMigrationsResult(version=2, is_applied=True)
    finally:
        connection.close()


def test_get_migration_result_fields(conn):
    store = SqlStore(TABLE, SqliteQuerier())
    store.create_version_table(conn)
    store.insert(conn, InsertRequest(version=7))
    migration = store.get_migration(conn, 7)
    assert isinstance(migration, GetMigrationResult)
    assert migration.is_applied is True
    with pytest.raises(VersionNotFoundError, match="version not found: 8"):
        store.get_migration(conn, 8)


def test_table_exists_unsupported(conn):
    store = SqlStore(TABLE, SqliteQuerier())
    with pytest.raises(UnsupportedError):
        store.table_exists(conn)


def test_table_exists_supported(conn):
    store = SqlStore(TABLE, SqliteQuerierExtended())
    assert store.table_exists(conn) is False
    store.create_version_table(conn)
    assert store.table_exists(conn) is True


def test_operations_without_table_fail(conn):
    store = SqlStore(TABLE, SqliteQuerier())
    with pytest.raises(RuntimeError, match="failed to insert version 1"):
        store.insert(conn, InsertRequest(version=1))
    with pytest.raises(RuntimeError, match="failed to delete version 1"):
        store.delete(conn, 1)
    with pytest.raises(RuntimeError, match="failed to list migrations"):
        store.list_migrations(conn)
    with pytest.raises(RuntimeError, match="failed to get latest version"):
        store.get_latest_version(conn)