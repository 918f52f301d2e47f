"""Helpers behind the command-line interface: environment and arguments."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from string import Template

from .create import create_with_template

DEFAULT_MIGRATION_DIR = "."

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

INIT_MIGRATION_TEMPLATE = Template(
    """-- Thank you for giving goose a try!
-- 
-- This file was automatically created running goose init. If you're familiar with goose
-- feel free to remove/rename this file, write some SQL and goose up.
--
-- A single goose .sql file holds both Up and Down migrations.
-- 
-- All goose .sql files are expected to have a -- +goose Up annotation.
-- The -- +goose Down annotation is optional, but recommended, and must come after the Up annotation.
-- 
-- The -- +goose NO TRANSACTION annotation may be added to the top of the file to run statements 
-- outside a transaction. Both Up and Down migrations within this file will be run without a transaction.
-- 
-- More complex statements that have semicolons within them must be annotated with 
-- the -- +goose StatementBegin and -- +goose StatementEnd annotations to be properly recognized.

-- +goose Up
SELECT 'up SQL query';

-- +goose Down
SELECT 'down SQL query';
"""
)


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def _env_or(key: str, default: str) -> str:
    return os.environ.get(key) or default


@dataclass(frozen=True)
class EnvVar:
    """A named environment setting and its value."""

    name: str
    value: str


@dataclass(frozen=True)
class EnvConfig:
    """Settings taken from GOOSE_* and NO_COLOR environment variables."""

    driver: str = ""
    dbstring: str = ""
    migration_dir: str = DEFAULT_MIGRATION_DIR
    table: str = ""
    no_color: bool = False

    @classmethod
    def load(cls) -> "EnvConfig":
        """Read the configuration from the current environment."""
        try:
            no_color = _parse_bool(_env_or("NO_COLOR", "false"))
        except ValueError:
            no_color = False
        return cls(
            driver=_env_or("GOOSE_DRIVER", ""),
            dbstring=_env_or("GOOSE_DBSTRING", ""),
            migration_dir=_env_or("GOOSE_MIGRATION_DIR", DEFAULT_MIGRATION_DIR),
            table=_env_or("GOOSE_TABLE", ""),
            no_color=no_color,
        )

    def list_envs(self) -> list[EnvVar]:
        """Return the settings as environment variables, in display order."""
        return [
            EnvVar("GOOSE_DRIVER", self.driver),
            EnvVar("GOOSE_DBSTRING", self.dbstring),
            EnvVar("GOOSE_MIGRATION_DIR", self.migration_dir),
            EnvVar("GOOSE_TABLE", self.table),
            EnvVar("NO_COLOR", "true" if self.no_color else "false"),
        ]


def first_non_empty(*args: str) -> str:
    """Return the first non-empty string, or "" when all are empty."""
    return next((value for value in args if value), "")


def merge_drivers(drivers) -> list[str]:
    """Group driver names sharing a prefix before "/" onto one sorted line each."""
    groups: dict[str, list[str]] = {}
    for driver in drivers:
        prefix = driver.split("/", 1)[0] if "/" in driver else driver
        groups.setdefault(prefix, []).append(driver)
    return sorted(", ".join(sorted(names)) for names in groups.values())


def merge_args(config: EnvConfig, args) -> list[str]:
    """Insert the driver and connection string from the environment into ``args``."""
    merged = list(args)
    if not merged:
        return merged
    if config.driver:
        merged.insert(0, config.driver)
    if config.dbstring:
        merged.insert(1, config.dbstring)
    return merged


def goose_init(directory: str) -> Path:
    """Create a migrations directory holding an initial SQL migration.

    Returns the path of the created migration file.
    """
    if not directory or directory == DEFAULT_MIGRATION_DIR:
        directory = "migrations"
    if os.path.lexists(directory):
        raise FileExistsError(f"directory already exists: {directory}")
    os.makedirs(directory, mode=0o755)
    return create_with_template(directory, "initial", "sql", INIT_MIGRATION_TEMPLATE)