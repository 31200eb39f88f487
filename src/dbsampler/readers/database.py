"""Database discovery and sampling using Ibis backends."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any, NoReturn

import ibis

from ..entities import SampleResult, TableRef
from ..errors import (
    CapabilityCheckError,
    DatabaseConnectionError,
    QueryError,
    ScanError,
)
from ._sql import TSM_SYSTEM_ROWS_QUERY, sample_query, tables_query
from ._values import classify_column, normalize_value

if TYPE_CHECKING:
    from collections.abc import Sequence


# Backend name mapping from URI scheme
SCHEME_TO_BACKEND: dict[str, str] = {
    "sqlite": "sqlite",
    "postgresql": "postgres",
    "postgres": "postgres",
    "mysql": "mysql",
}

# Supported dialects (Ibis backend names)
DIALECTS = ("postgres", "mysql", "sqlite")

# Backend → (display name, driver package, ibis extra)
DRIVER_PACKAGES: dict[str, tuple[str, str, str]] = {
    "postgres": ("PostgreSQL", "psycopg", "postgres"),
    "mysql": ("MySQL", "mysqlclient", "mysql"),
    "sqlite": ("SQLite", "sqlite3", "sqlite"),
}

DEFAULT_PORTS: dict[str, int] = {
    "postgres": 5432,
    "mysql": 3306,
}


def get_backend_name(con: ibis.BaseBackend) -> str:
    """Get backend name from connection object."""
    return type(con).__module__.split(".")[-1]


def dialect_of(con: ibis.BaseBackend) -> str:
    """Return the dialect of a connection, rejecting unsupported backends."""
    backend_name = get_backend_name(con)
    if backend_name not in DIALECTS:
        raise ValueError(
            f"Backend {backend_name!r} is not supported for sampling. "
            "Use sqlite, postgres, or mysql."
        )
    return backend_name


def parse_connection_string(connection: str) -> tuple[str, dict[str, str]]:
    """Parse a connection string into (backend_name, kwargs)."""
    from urllib.parse import parse_qs, unquote, urlparse

    parsed = urlparse(connection)
    scheme = parsed.scheme.lower()

    backend = SCHEME_TO_BACKEND.get(scheme)
    if backend is None:
        supported = ", ".join(sorted(SCHEME_TO_BACKEND.keys()))
        raise ValueError(
            f"Unsupported database scheme: {scheme!r}. Supported: {supported}"
        )

    kwargs: dict[str, str] = {}

    if backend == "sqlite":
        # Strip leading / from path (sqlite:///path -> path, sqlite:////abs -> /abs)
        path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
        kwargs["path"] = path if path else ":memory:"
        return backend, kwargs

    if parsed.hostname:
        kwargs["host"] = parsed.hostname
    if parsed.port:
        kwargs["port"] = str(parsed.port)
    if parsed.username:
        kwargs["user"] = unquote(parsed.username)
    if parsed.password:
        kwargs["password"] = unquote(parsed.password)
    if parsed.path and parsed.path != "/":
        kwargs["database"] = parsed.path.lstrip("/")

    # Query string parameters are passed through to the driver
    if parsed.query:
        for key, values in parse_qs(parsed.query).items():
            if values:
                kwargs[key] = values[0]

    return backend, kwargs


def raise_driver_error(backend: str, exc: ModuleNotFoundError) -> NoReturn:
    """Re-raise a missing driver as an ImportError with install instructions."""
    if backend not in DRIVER_PACKAGES:
        raise ImportError(f"Missing driver for {backend}: {exc}") from exc
    display, package, extra = DRIVER_PACKAGES[backend]
    raise ImportError(
        f"{display} requires {package}. "
        f"Install it with: pip install 'ibis-framework[{extra}]'"
    ) from exc


def _connect_external_backend(backend: str, kwargs: dict[str, str]) -> Any:
    """Open a PostgreSQL or MySQL connection from parsed kwargs."""
    params: dict[str, Any] = dict(kwargs)
    params.setdefault("host", "localhost")
    params["port"] = int(params.get("port", DEFAULT_PORTS[backend]))
    if backend == "postgres":
        return ibis.postgres.connect(**params)
    return ibis.mysql.connect(**params)


def connect(connection: str | ibis.BaseBackend) -> tuple[ibis.BaseBackend, str]:
    """Connect to a database, return (connection, dialect)."""
    if isinstance(connection, ibis.BaseBackend):
        return connection, dialect_of(connection)

    backend, kwargs = parse_connection_string(connection)

    try:
        if backend == "sqlite":
            con = ibis.sqlite.connect(kwargs["path"])
        else:
            con = _connect_external_backend(backend, kwargs)
    except ModuleNotFoundError as exc:
        raise_driver_error(backend, exc)

    return con, backend


def _match_patterns(items: list[str], patterns: Sequence[str]) -> set[str]:
    """Match items against glob patterns."""
    import fnmatch

    matched: set[str] = set()
    for pattern in patterns:
        if "*" in pattern or "?" in pattern:
            matched.update(fnmatch.filter(items, pattern))
        elif pattern in items:
            matched.add(pattern)
    return matched


def _as_identifier(value: Any) -> str:
    """Decode an identifier returned by an introspection query."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    if not isinstance(value, str):
        raise TypeError(f"Unexpected identifier type {type(value).__name__}")
    return value


def discover_tables(
    con: ibis.BaseBackend,
    *,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> list[TableRef]:
    """List user tables as (schema, name) refs, system schemas excluded.

    SQLite tables are ordered by name and have an empty schema; other
    dialects are ordered by schema, then name. Optional glob patterns filter
    on the table name without changing the order.
    """
    dialect = dialect_of(con)

    try:
        cursor = con.raw_sql(tables_query(dialect))
        try:
            rows = cursor.fetchall()
        finally:
            cursor.close()
    except Exception as exc:
        raise DatabaseConnectionError(
            f"Cannot list tables ({dialect}): {exc}"
        ) from exc

    try:
        tables = [
            TableRef(_as_identifier(schema), _as_identifier(name))
            for schema, name in rows
        ]
    except (TypeError, ValueError, UnicodeDecodeError) as exc:
        raise DatabaseConnectionError(
            f"Malformed table listing ({dialect}): {exc}"
        ) from exc

    names = [t.name for t in tables]
    if include is not None:
        included = _match_patterns(names, include)
        tables = [t for t in tables if t.name in included]
    if exclude is not None:
        excluded = _match_patterns(names, exclude)
        tables = [t for t in tables if t.name not in excluded]

    return tables


def supports_tsm_system_rows(con: ibis.BaseBackend) -> bool:
    """Check whether the PostgreSQL tsm_system_rows extension is installed."""
    try:
        cursor = con.raw_sql(TSM_SYSTEM_ROWS_QUERY)
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
    except Exception as exc:
        raise CapabilityCheckError(
            f"Cannot check for tsm_system_rows: {exc}"
        ) from exc

    if row is None:
        raise CapabilityCheckError("Extension probe returned no row")
    return int(row[0]) > 0


def _sqlite_connection(con: ibis.BaseBackend) -> sqlite3.Connection | None:
    """Return the sqlite3 connection wrapped by an Ibis SQLite backend."""
    raw = getattr(con, "con", None)
    return raw if isinstance(raw, sqlite3.Connection) else None


def _check_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"Limit must be a positive integer, got {limit!r}")


def sample_table(
    con: ibis.BaseBackend,
    table: TableRef | str,
    limit: int,
    *,
    schema: str = "",
) -> SampleResult:
    """Sample at most `limit` rows of a table, values normalized to text."""
    _check_limit(limit)
    if isinstance(table, str):
        table = TableRef(schema, table)
    dialect = dialect_of(con)

    # Not cached, probed on every call
    tsm_system_rows = dialect == "postgres" and supports_tsm_system_rows(con)
    query, sampling = sample_query(
        table, limit, dialect, tsm_system_rows=tsm_system_rows
    )

    # TEXT is fetched as raw bytes so invalid UTF-8 cannot fail the fetch
    sqlite_con = _sqlite_connection(con) if dialect == "sqlite" else None
    if sqlite_con is not None:
        text_factory = sqlite_con.text_factory
        sqlite_con.text_factory = bytes

    try:
        try:
            cursor = con.raw_sql(query)
        except Exception as exc:
            raise QueryError(f"Cannot sample {table}: {exc}") from exc

        try:
            column_names, column_kinds, column_values, nb_row = _read_sample(
                cursor, table, limit, dialect
            )
        finally:
            cursor.close()
    finally:
        if sqlite_con is not None:
            sqlite_con.text_factory = text_factory

    return SampleResult(
        table=table,
        column_names=column_names,
        column_values=column_values,
        column_kinds=column_kinds,
        nb_row=nb_row,
        sampling=sampling,
    )


def _read_sample(
    cursor: Any, table: TableRef, limit: int, dialect: str
) -> tuple[tuple[str, ...], tuple[str, ...], tuple[tuple[str, ...], ...], int]:
    """Drain at most `limit` rows into per-column text values."""
    description = cursor.description or ()
    column_names = tuple(str(col[0]) for col in description)
    column_kinds = tuple(classify_column(dialect, col[1]) for col in description)
    column_values: list[list[str]] = [[] for _ in column_names]

    try:
        rows = cursor.fetchmany(limit)
    except Exception as exc:
        raise ScanError(f"Cannot fetch rows from {table}: {exc}") from exc

    for row_index, row in enumerate(rows):
        if len(row) != len(column_names):
            raise ScanError(
                f"Row {row_index} of {table} has {len(row)} values, "
                f"expected {len(column_names)}"
            )
        for i, (raw, kind) in enumerate(zip(row, column_kinds)):
            try:
                text = normalize_value(raw, kind)
            except (TypeError, ValueError) as exc:
                raise ScanError(
                    f"Cannot decode {table}.{column_names[i]} "
                    f"in row {row_index}: {exc}"
                ) from exc
            if text is not None:
                column_values[i].append(text)

    return (
        column_names,
        column_kinds,
        tuple(tuple(values) for values in column_values),
        len(rows),
    )
