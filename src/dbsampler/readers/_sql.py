"""SQL text for table discovery and sampling, per dialect."""

from __future__ import annotations

from ..entities import SamplingMethod, TableRef

# System schemas excluded from discovery (per dialect)
SYSTEM_SCHEMAS: dict[str, tuple[str, ...]] = {
    "postgres": ("information_schema", "pg_catalog", "pg_toast"),
    "mysql": ("information_schema", "mysql", "performance_schema", "sys"),
}

SQLITE_TABLES_QUERY = (
    "SELECT '' AS table_schema, name AS table_name FROM sqlite_master "
    "WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\' "
    "ORDER BY name"
)

TSM_SYSTEM_ROWS_QUERY = (
    "SELECT COUNT(*) FROM pg_extension WHERE extname = 'tsm_system_rows'"
)


def tables_query(dialect: str) -> str:
    """Return the introspection query listing (schema, name) pairs."""
    if dialect == "sqlite":
        return SQLITE_TABLES_QUERY
    excluded = ", ".join(f"'{schema}'" for schema in SYSTEM_SCHEMAS[dialect])
    return (
        "SELECT table_schema, table_name FROM information_schema.tables "
        f"WHERE table_schema NOT IN ({excluded}) "
        "ORDER BY table_schema, table_name"
    )


def quote_identifier(identifier: str, dialect: str) -> str:
    """Quote an identifier, doubling embedded quote characters."""
    quote = "`" if dialect == "mysql" else '"'
    return quote + identifier.replace(quote, quote * 2) + quote


def qualified_name(table: TableRef, dialect: str) -> str:
    """Return the quoted table reference, unqualified when schema is empty."""
    name = quote_identifier(table.name, dialect)
    if not table.schema:
        return name
    return f"{quote_identifier(table.schema, dialect)}.{name}"


def sample_query(
    table: TableRef, limit: int, dialect: str, *, tsm_system_rows: bool = False
) -> tuple[str, SamplingMethod]:
    """Build the sampling query and report whether it samples randomly."""
    target = qualified_name(table, dialect)
    if dialect == "postgres" and tsm_system_rows:
        return f"SELECT * FROM {target} TABLESAMPLE SYSTEM_ROWS({limit})", "random"
    if dialect == "sqlite":
        # Full scan and sort, acceptable for the small files SQLite holds
        return f"SELECT * FROM {target} ORDER BY RANDOM() LIMIT {limit}", "random"
    return f"SELECT * FROM {target} LIMIT {limit}", "sequential"
