"""A version store that keeps applied migrations in a database table."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterator, Sequence

from .querier import QueryController


class VersionNotFoundError(LookupError):
    """The requested migration version is not recorded."""

    def __init__(self, message: str = "version not found") -> None:
        super().__init__(message)


class UnsupportedError(Exception):
    """The operation is not supported by this store's dialect."""


@dataclass(frozen=True)
class InsertRequest:
    """A request to record a migration version."""

    version: int


@dataclass(frozen=True)
class GetMigrationResult:
    """When a version was recorded and whether it is applied."""

    timestamp: datetime
    is_applied: bool


@dataclass(frozen=True)
class ListMigrationsResult:
    """A recorded version and whether it is applied."""

    version: int
    is_applied: bool


@contextmanager
def _cursor(db: Any, query: str, params: Sequence[Any] = ()) -> Iterator[Any]:
    """Run ``query`` on a DB-API connection or cursor and yield the cursor."""
    factory = getattr(db, "cursor", None)
    if callable(factory):
        cursor = factory()
        try:
            cursor.execute(query, tuple(params))
            yield cursor
        finally:
            cursor.close()
    else:
        db.execute(query, tuple(params))
        yield db


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, bytes):
        value = value.decode()
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    raise TypeError(f"cannot read timestamp from {value!r}")


class SqlStore:
    """Records migration versions in a table using a dialect's queries.

    ``db`` arguments are DB-API connections or cursors.
    """

    def __init__(self, table_name: str, querier: Any) -> None:
        if not table_name:
            raise ValueError("table name must not be empty")
        if querier is None:
            raise ValueError("querier must not be nil")
        self.table_name = table_name
        self.querier = QueryController(querier)

    def create_version_table(self, db: Any) -> None:
        """Create the version table."""
        query = self.querier.create_table(self.table_name)
        try:
            with _cursor(db, query):
                pass
        except Exception as err:
            raise RuntimeError(
                f'failed to create version table "{self.table_name}": {err}'
            ) from err

    def insert(self, db: Any, request: InsertRequest) -> None:
        """Record a version as applied."""
        query = self.querier.insert_version(self.table_name)
        try:
            with _cursor(db, query, (request.version, True)):
                pass
        except Exception as err:
            raise RuntimeError(f"failed to insert version {request.version}: {err}") from err

    def delete(self, db: Any, version: int) -> None:
        """Remove a version from the table."""
        query = self.querier.delete_version(self.table_name)
        try:
            with _cursor(db, query, (version,)):
                pass
        except Exception as err:
            raise RuntimeError(f"failed to delete version {version}: {err}") from err

    def get_migration(self, db: Any, version: int) -> GetMigrationResult:
        """Return one recorded version, or raise VersionNotFoundError."""
        query = self.querier.get_migration_by_version(self.table_name)
        try:
            with _cursor(db, query, (version,)) as cursor:
                row = cursor.fetchone()
            if row is None:
                raise VersionNotFoundError(f"version not found: {version}")
            return GetMigrationResult(
                timestamp=_as_datetime(row[0]), is_applied=bool(row[1])
            )
        except VersionNotFoundError:
            raise
        except Exception as err:
            raise RuntimeError(f"failed to get migration {version}: {err}") from err

    def get_latest_version(self, db: Any) -> int:
        """Return the highest recorded version, or raise VersionNotFoundError."""
        query = self.querier.get_latest_version(self.table_name)
        try:
            with _cursor(db, query) as cursor:
                row = cursor.fetchone()
        except Exception as err:
            raise RuntimeError(f"failed to get latest version: {err}") from err
        if row is None:
            raise RuntimeError("failed to get latest version: no rows in result set")
        if row[0] is None:
            raise VersionNotFoundError("latest version not found")
        return int(row[0])

    def list_migrations(self, db: Any) -> list[ListMigrationsResult]:
        """Return every recorded version in the order the dialect's query gives."""
        query = self.querier.list_migrations(self.table_name)
        try:
            with _cursor(db, query) as cursor:
                rows = cursor.fetchall()
        except Exception as err:
            raise RuntimeError(f"failed to list migrations: {err}") from err
        try:
            return [
                ListMigrationsResult(version=int(version), is_applied=bool(applied))
                for version, applied in rows
            ]
        except (TypeError, ValueError) as err:
            raise RuntimeError(f"failed to scan list migrations result: {err}") from err

    def table_exists(self, db: Any) -> bool:
        """Report whether the version table exists, if the dialect can tell."""
        query = self.querier.table_exists(self.table_name)
        if not query:
            raise UnsupportedError("unsupported operation")
        try:
            with _cursor(db, query) as cursor:
                row = cursor.fetchone()
            return bool(row[0])
        except Exception as err:
            raise RuntimeError(f"failed to check if table exists: {err}") from err


def new_store_from_querier(table_name: str, querier: Any) -> SqlStore:
    """Return a store for ``table_name`` built on a custom querier."""
    return SqlStore(table_name, querier)