"""Column classification and value normalization for sampled rows."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

# Value classes a column can be assigned to
NUMERIC = "numeric"
TEMPORAL = "temporal"
BINARY = "binary"
TEXT = "text"
BOOLEAN = "boolean"

# PostgreSQL type OIDs (pg_type.oid), as reported in cursor.description
POSTGRES_TYPES: dict[int, str] = {
    16: BOOLEAN,  # bool
    17: BINARY,  # bytea
    20: NUMERIC,  # int8
    21: NUMERIC,  # int2
    23: NUMERIC,  # int4
    26: NUMERIC,  # oid
    700: NUMERIC,  # float4
    701: NUMERIC,  # float8
    790: NUMERIC,  # money
    1700: NUMERIC,  # numeric
    1082: TEMPORAL,  # date
    1083: TEMPORAL,  # time
    1114: TEMPORAL,  # timestamp
    1184: TEMPORAL,  # timestamptz
    1186: TEMPORAL,  # interval
    1266: TEMPORAL,  # timetz
}

# MySQL field types (MySQLdb.constants.FIELD_TYPE)
MYSQL_TYPES: dict[int, str] = {
    0: NUMERIC,  # DECIMAL
    1: NUMERIC,  # TINY
    2: NUMERIC,  # SHORT
    3: NUMERIC,  # LONG
    4: NUMERIC,  # FLOAT
    5: NUMERIC,  # DOUBLE
    8: NUMERIC,  # LONGLONG
    9: NUMERIC,  # INT24
    13: NUMERIC,  # YEAR
    246: NUMERIC,  # NEWDECIMAL
    7: TEMPORAL,  # TIMESTAMP
    10: TEMPORAL,  # DATE
    11: TEMPORAL,  # TIME
    12: TEMPORAL,  # DATETIME
    14: TEMPORAL,  # NEWDATE
    16: BINARY,  # BIT
    249: BINARY,  # TINY_BLOB
    250: BINARY,  # MEDIUM_BLOB
    251: BINARY,  # LONG_BLOB
    252: BINARY,  # BLOB
    255: BINARY,  # GEOMETRY
}

# SQLite reports no type code at all: every column is opaque text
TYPE_TABLES: dict[str, dict[int, str]] = {
    "postgres": POSTGRES_TYPES,
    "mysql": MYSQL_TYPES,
    "sqlite": {},
}


def classify_column(dialect: str, type_code: Any) -> str:
    """Return the value class for a driver type code (text if unknown)."""
    if type_code is None:
        return TEXT
    try:
        return TYPE_TABLES.get(dialect, {}).get(int(type_code), TEXT)
    except (TypeError, ValueError):
        return TEXT


def _format_bytes(value: bytes | bytearray | memoryview) -> str:
    raw = bytes(value)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return "\\x" + raw.hex()


def _format_decimal(value: Decimal) -> str:
    return format(value, "f")


def _format_datetime(value: datetime) -> str:
    return value.isoformat(sep=" ")


def _format_json(value: dict[Any, Any] | list[Any]) -> str:
    return json.dumps(value, ensure_ascii=False, default=format_value)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


# Runtime type → formatter (checked in order, bool before int, datetime before date)
_FORMATTERS: list[tuple[type | tuple[type, ...], Callable[[Any], str]]] = [
    (str, str),
    (bool, _format_bool),
    (int, str),
    (float, repr),
    (Decimal, _format_decimal),
    (datetime, _format_datetime),
    ((date, time), lambda v: v.isoformat()),
    (timedelta, str),
    ((bytes, bytearray, memoryview), _format_bytes),
    ((dict, list), _format_json),
]


def format_value(value: Any) -> str:
    """Format a non-null value as text according to its runtime type.

    Types without a dedicated formatter (UUID, network addresses, ranges)
    use their own string form.
    """
    for value_type, formatter in _FORMATTERS:
        if isinstance(value, value_type):
            return formatter(value)
    return str(value)


def _format_boolean_column(value: Any) -> str:
    # PostgreSQL bool columns come back as Python bool
    if isinstance(value, bool):
        return _format_bool(value)
    return format_value(value)


def _format_binary_column(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _format_bytes(value)
    return format_value(value)


_COLUMN_FORMATTERS: dict[str, Callable[[Any], str]] = {
    NUMERIC: format_value,
    TEMPORAL: format_value,
    BINARY: _format_binary_column,
    TEXT: format_value,
    BOOLEAN: _format_boolean_column,
}


def normalize_value(value: Any, kind: str) -> str | None:
    """Return the text form of a cell, or None if it is null or empty."""
    if value is None:
        return None
    text = _COLUMN_FORMATTERS.get(kind, format_value)(value)
    return text or None
