"""Fixtures and test data for database tests."""

from __future__ import annotations

import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pyarrow as pa
import pytest

if TYPE_CHECKING:
    import ibis


# Shared test data (single source of truth)
EMPLOYEES_DATA = pa.table(
    {
        "id": [1, 2, 3, 4, 5],
        "name": ["Alice", "Bob", "Charlie", "Diana", "Eve"],
        "department": ["Engineering", "Engineering", "Sales", "Sales", "HR"],
        "salary": [75000.0, 80000.0, 65000.0, 70000.0, 60000.0],
        "hire_date": [
            "2020-01-15",
            "2019-06-01",
            "2021-03-20",
            "2020-11-10",
            "2022-02-28",
        ],
    }
)

DEPARTMENTS_DATA = pa.table(
    {
        "id": [1, 2, 3],
        "name": ["Engineering", "Sales", "HR"],
        "budget": [500000.0, 300000.0, 150000.0],
    }
)

# Empty and null values are dropped when sampling
SPARSE_DATA = pa.table(
    {
        "id": [1, 2, 3],
        "name": ["a", "", None],
    }
)

# Schema test data
ORDERS_DATA = pa.table(
    {
        "id": [1, 2],
        "customer": ["Alice", "Bob"],
        "amount": [100.0, 250.50],
    }
)

CUSTOMERS_DATA = pa.table(
    {
        "id": [1, 2],
        "name": ["Alice", "Bob"],
    }
)

PRODUCTS_DATA = pa.table(
    {
        "id": [1],
        "name": ["Widget"],
        "stock": [100],
    }
)

# Larger table for bounded scans
BIG_DATA = pa.table(
    {
        "id": list(range(1, 1001)),
        "label": [f"row-{i}" for i in range(1, 1001)],
    }
)

# Empty table for testing edge cases
EMPTY_TABLE_DATA = pa.table(
    {
        "id": pa.array([], type=pa.int64()),
        "value": pa.array([], type=pa.string()),
    }
)

TEST_TABLES = ["employees", "departments", "sparse", "big_table", "empty_table"]


def create_test_tables(con: ibis.BaseBackend) -> None:
    """Create test tables using Ibis (backend-agnostic)."""
    con.create_table("employees", EMPLOYEES_DATA, overwrite=True)
    con.create_table("departments", DEPARTMENTS_DATA, overwrite=True)
    con.create_table("sparse", SPARSE_DATA, overwrite=True)
    con.create_table("big_table", BIG_DATA, overwrite=True)
    con.create_table("empty_table", EMPTY_TABLE_DATA, overwrite=True)


def drop_test_tables(con: ibis.BaseBackend) -> None:
    """Drop test tables if they exist."""
    for table in TEST_TABLES:
        try:
            con.drop_table(table, force=True)
        except Exception:
            pass


def create_schema_tables(con: ibis.BaseBackend, backend: str) -> None:
    """Create schemas and tables for schema tests.

    Creates:
    - sales schema: orders, customers tables
    - inventory schema: products table
    """
    raw_sql: Any = getattr(con, "raw_sql")

    if backend == "mysql":
        # MySQL uses databases as schemas
        raw_sql("CREATE DATABASE IF NOT EXISTS sales").close()
        raw_sql("CREATE DATABASE IF NOT EXISTS inventory").close()
    else:
        raw_sql("CREATE SCHEMA IF NOT EXISTS sales").close()
        raw_sql("CREATE SCHEMA IF NOT EXISTS inventory").close()

    con.create_table("orders", ORDERS_DATA, overwrite=True, database="sales")
    con.create_table("customers", CUSTOMERS_DATA, overwrite=True, database="sales")
    con.create_table("products", PRODUCTS_DATA, overwrite=True, database="inventory")


def drop_schema_tables(con: ibis.BaseBackend, backend: str) -> None:
    """Drop schema test tables and schemas."""
    raw_sql: Any = getattr(con, "raw_sql")

    for schema, table in [
        ("sales", "orders"),
        ("sales", "customers"),
        ("inventory", "products"),
    ]:
        try:
            con.drop_table(table, database=schema, force=True)
        except Exception:
            pass

    for schema in ["sales", "inventory"]:
        statement = (
            f"DROP DATABASE IF EXISTS {schema}"
            if backend == "mysql"
            else f"DROP SCHEMA IF EXISTS {schema} CASCADE"
        )
        try:
            raw_sql(statement).close()
        except Exception:
            pass


@pytest.fixture
def sample_sqlite_db() -> Generator[Path, None, None]:
    """Create a temporary SQLite database with sample data."""
    import ibis

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    con = ibis.sqlite.connect(db_path)
    create_test_tables(con)
    con.disconnect()

    yield db_path

    db_path.unlink(missing_ok=True)
