"""Creation of new, blank migration files."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from string import Template

from .naming import camel_case, snake_case

log = logging.getLogger("goose")

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

SQL_MIGRATION_TEMPLATE = Template(
    """-- +goose Up
-- +goose StatementBegin
SELECT 'up SQL query';
-- +goose StatementEnd

-- +goose Down
-- +goose StatementBegin
SELECT 'down SQL query';
-- +goose StatementEnd
"""
)

GO_MIGRATION_TEMPLATE = Template(
    """package migrations

import (
	"context"
	"database/sql"
	"github.com/pressly/goose/v3"
)

func init() {
	goose.AddMigrationContext(up${camel_name}, down${camel_name})
}

func up${camel_name}(ctx context.Context, tx *sql.Tx) error {
	// This code is executed when the migration is applied.
	return nil
}

func down${camel_name}(ctx context.Context, tx *sql.Tx) error {
	// This code is executed when the migration is rolled back.
	return nil
}
"""
)


def _version_for(now: datetime | None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def create_with_template(
    directory, name: str, migration_type: str, template=None, now: datetime | None = None
) -> Path:
    """Write a new migration file built from ``template`` and return its path.

    ``template`` is a :class:`string.Template` (or its source text) that may use
    ``$version`` and ``$camel_name``. When omitted, a Go or SQL template is
    chosen by ``migration_type``. The version is the UTC timestamp of ``now``.
    """
    version = _version_for(now)
    filename = f"{version}_{snake_case(name)}.{migration_type}"

    if template is None:
        template = GO_MIGRATION_TEMPLATE if migration_type == "go" else SQL_MIGRATION_TEMPLATE
    elif isinstance(template, str):
        template = Template(template)

    try:
        content = template.substitute(version=version, camel_name=camel_case(name))
    except (KeyError, ValueError) as err:
        raise ValueError(f"failed to execute tmpl: {err}") from err

    path = Path(directory) / filename
    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(content)
    except FileExistsError as err:
        raise FileExistsError(f"failed to create migration file: {err}") from err
    except OSError as err:
        raise OSError(f"failed to create migration file: {err}") from err

    log.info("Created new file: %s", path)
    return path


def create(directory, name: str, migration_type: str) -> Path:
    """Write a new blank migration file of ``migration_type`` ("go" or "sql")."""
    return create_with_template(directory, name, migration_type)