"""dbsampler - discover tables and sample their values across SQL dialects."""

__version__ = "0.1.0"

from ._sample_database import sample_database
from .entities import SampleResult, TableRef
from .errors import (
    CapabilityCheckError,
    DatabaseConnectionError,
    QueryError,
    SamplerError,
    ScanError,
)
from .readers import (
    connect,
    dialect_of,
    discover_tables,
    parse_connection_string,
    sample_table,
)

__all__ = [
    "CapabilityCheckError",
    "DatabaseConnectionError",
    "QueryError",
    "SampleResult",
    "SamplerError",
    "ScanError",
    "TableRef",
    "connect",
    "dialect_of",
    "discover_tables",
    "parse_connection_string",
    "sample_database",
    "sample_table",
]
