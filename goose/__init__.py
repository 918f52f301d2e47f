"""Migration file creation, dialect names and a version-table store."""

__version__ = "3.18.0"