"""Database readers for discovering and sampling tables."""

from .database import (
    SCHEME_TO_BACKEND,
    connect,
    dialect_of,
    discover_tables,
    parse_connection_string,
    sample_table,
    supports_tsm_system_rows,
)

__all__ = [
    "SCHEME_TO_BACKEND",
    "connect",
    "dialect_of",
    "discover_tables",
    "parse_connection_string",
    "sample_table",
    "supports_tsm_system_rows",
]
