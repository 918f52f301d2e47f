# goose

Building blocks for managing database schema migrations. The package names
new migration files consistently and writes them from templates, maps database
driver names onto the SQL dialects it knows, and records applied migration
versions in a version table through a store driven by dialect-specific SQL.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Naming migrations

`goose.naming` turns free-form migration names into file-safe and
identifier-safe forms. Every character that is not a letter or digit acts as
a delimiter and is dropped:

```python
from goose.naming import camel_case, snake_case

snake_case("Add updated_at to users table")  # "add_updated_at_to_users_table"
camel_case("Add updated_at to users table")  # "AddUpdatedAtToUsersTable"
snake_case("$()&^%(_--crazy__--input$)")     # "crazy_input"
```

## Creating migration files

`goose.create.create(directory, name, migration_type)` writes a new, blank
migration file into an existing directory and returns its path. The file name
is the current UTC time as `YYYYMMDDHHMMSS`, followed by the snake-cased name
and the migration type as its extension:

```python
from goose.create import create

create("migrations", "add users table", "sql")
# PosixPath('migrations/20240101120000_add_users_table.sql')
```

A `"sql"` file (or any type other than `"go"`) holds an `-- +goose Up` and an
`-- +goose Down` section, each with a `StatementBegin`/`StatementEnd` block to
fill in. A `"go"` file holds a skeleton with up and down functions named after
the camel-cased migration name. Creating a file that already exists raises
`FileExistsError`.

`goose.create.create_with_template(directory, name, migration_type, template, now)`
does the same with a template of your own: a `string.Template` or its source
text, which may use `$version` and `$camel_name`. A template that refers to
any other placeholder raises `ValueError`. Passing `now` fixes the timestamp,
which is handy for reproducible output:

```python
from datetime import datetime, timezone
from goose.create import create_with_template

create_with_template(
    "migrations", "seed data", "sql",
    "-- version $version\n",
    datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
)
# migrations/20240101120000_seed_data.sql
```

To start a fresh project, `goose.cli.goose_init(directory)` creates the
directory (`migrations` when given an empty path or `.`) holding an annotated
`initial` SQL migration, and returns the path of that file. It raises
`FileExistsError` if the directory already exists.

## Dialects and drivers

```python
from goose.dialect import Dialect, parse_dialect, resolve_driver

parse_dialect("pgx")        # Dialect.POSTGRES
parse_dialect("sqlserver")  # Dialect.MSSQL
resolve_driver("sqlite3")   # "sqlite"
resolve_driver("redshift")  # "pgx"
```

`Dialect` covers clickhouse, mssql, mysql, postgres, redshift, sqlite3,
starrocks, tidb, turso, vertica and ydb, plus an empty `CUSTOM` value. An
unknown dialect or driver name raises `ValueError`.

## Tracking versions

`goose.database.store.SqlStore` records applied versions in a version table.
It is built from a table name and a querier: an object that returns the SQL
text for each operation. `goose.database.querier.Querier` is the abstract base
listing them (`create_table`, `insert_version`, `delete_version`,
`get_migration_by_version`, `list_migrations`, `get_latest_version`); a
querier may also offer `table_exists`. `QueryController` wraps a querier and
answers `table_exists` with an empty string when the querier has none.

The package ships no queriers of its own, so you supply one. The `db`
argument of each store method is a DB-API connection or cursor. A querier for
SQLite could look like this:

```python
import sqlite3

from goose.database.querier import Querier
from goose.database.store import InsertRequest, new_store_from_querier


class SqliteQuerier(Querier):
    def create_table(self, t):
        return (f"CREATE TABLE {t} (id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "version_id INTEGER NOT NULL, is_applied INTEGER NOT NULL, "
                "tstamp TIMESTAMP DEFAULT (datetime('now')))")

    def insert_version(self, t):
        return f"INSERT INTO {t} (version_id, is_applied) VALUES (?, ?)"

    def delete_version(self, t):
        return f"DELETE FROM {t} WHERE version_id = ?"

    def get_migration_by_version(self, t):
        return (f"SELECT tstamp, is_applied FROM {t} WHERE version_id = ? "
                "ORDER BY tstamp DESC LIMIT 1")

    def list_migrations(self, t):
        return f"SELECT version_id, is_applied FROM {t} ORDER BY id DESC"

    def get_latest_version(self, t):
        return f"SELECT MAX(version_id) FROM {t}"


conn = sqlite3.connect(":memory:", isolation_level=None)
store = new_store_from_querier("goose_db_version", SqliteQuerier())
store.create_version_table(conn)
store.insert(conn, InsertRequest(version=1))
store.get_latest_version(conn)   # 1
store.list_migrations(conn)      # [ListMigrationsResult(version=1, is_applied=True)]
store.get_migration(conn, 1)     # GetMigrationResult(timestamp=..., is_applied=True)
```

`list_migrations` returns rows in the order the querier's query gives them,
newest first by convention. An empty table name or a missing querier raises
`ValueError`. Looking up a version that is not recorded, or the latest
version of an empty table, raises `VersionNotFoundError`; calling
`table_exists` when the querier cannot say raises `UnsupportedError`. Database
errors are re-raised as `RuntimeError` with a message naming the operation.

## Environment and argument helpers

`goose.cli.EnvConfig.load()` reads `GOOSE_DRIVER`, `GOOSE_DBSTRING`,
`GOOSE_MIGRATION_DIR` (default `.`), `GOOSE_TABLE` and `NO_COLOR` from the
environment; `list_envs()` reports them back as `EnvVar(name, value)` pairs.
The module also provides:

- `first_non_empty(*args)`: the first non-empty string, or `""`.
- `merge_drivers(drivers)`: driver names sharing a prefix before `/` joined
  onto one line, the lines sorted.
- `merge_args(config, args)`: `args` with the driver and connection string
  from an `EnvConfig` inserted at the front when they are set.

## What this package does not do

There is no `goose` command to run, and the package does not open database
connections, parse SQL migration files, or apply, roll back, stamp or report
the status of migrations. It provides the pieces listed above: file creation,
dialect names and the version-table store, which you combine with your own
connection and querier.