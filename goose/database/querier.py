"""Builders of the dialect-specific SQL used to manage the version table."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Querier(ABC):
    """Produces the SQL statements for one database dialect.

    A querier may also define ``table_exists(table_name)`` returning a query that
    yields a single boolean, or an empty string when the check is unsupported.
    """

    @abstractmethod
    def create_table(self, table_name: str) -> str:
        """SQL that creates the version table."""

    @abstractmethod
    def insert_version(self, table_name: str) -> str:
        """SQL that inserts a version; takes the version and the applied flag."""

    @abstractmethod
    def delete_version(self, table_name: str) -> str:
        """SQL that deletes a version; takes the version."""

    @abstractmethod
    def get_migration_by_version(self, table_name: str) -> str:
        """SQL returning the timestamp and applied flag of one version."""

    @abstractmethod
    def list_migrations(self, table_name: str) -> str:
        """SQL returning version and applied flag of all rows, newest first."""

    @abstractmethod
    def get_latest_version(self, table_name: str) -> str:
        """SQL returning the highest version, or NULL when there is none."""


class QueryController(Querier):
    """Wraps a querier and supplies defaults for its optional queries."""

    def __init__(self, querier) -> None:
        self.querier = querier

    def create_table(self, table_name: str) -> str:
        return self.querier.create_table(table_name)

    def insert_version(self, table_name: str) -> str:
        return self.querier.insert_version(table_name)

    def delete_version(self, table_name: str) -> str:
        return self.querier.delete_version(table_name)

    def get_migration_by_version(self, table_name: str) -> str:
        return self.querier.get_migration_by_version(table_name)

    def list_migrations(self, table_name: str) -> str:
        return self.querier.list_migrations(table_name)

    def get_latest_version(self, table_name: str) -> str:
        return self.querier.get_latest_version(table_name)

    def table_exists(self, table_name: str) -> str:
        """SQL checking that the version table exists, or "" if not provided."""
        check = getattr(self.querier, "table_exists", None)
        if callable(check):
            return check(table_name)
        return ""