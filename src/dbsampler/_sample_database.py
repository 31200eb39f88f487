"""Sample every table of a database."""

from __future__ import annotations

import time
from collections.abc import Sequence

import ibis

from .entities import SampleResult, TableRef
from .errors import CapabilityCheckError, QueryError, ScanError
from .readers.database import connect, discover_tables, sample_table
from .utils.log import log_done, log_section, log_start, log_summary, log_warn


def sample_database(
    connection: str | ibis.BaseBackend,
    limit: int,
    *,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    skip_errors: bool = True,
    quiet: bool = False,
) -> dict[TableRef, SampleResult]:
    """Discover tables and sample each one, in discovery order.

    With ``skip_errors`` a table that cannot be sampled is logged and left
    out of the result; otherwise its error propagates. Discovery errors
    always propagate.
    """
    start_time = time.perf_counter()
    con, dialect = connect(connection)
    owns_connection = not isinstance(connection, ibis.BaseBackend)

    results: dict[TableRef, SampleResult] = {}
    nb_skipped = 0
    try:
        log_section("sample_database", dialect, quiet=quiet)
        tables = discover_tables(con, include=include, exclude=exclude)

        for table in tables:
            table_start = time.perf_counter()
            log_start(str(table), quiet=quiet)
            try:
                result = sample_table(con, table, limit)
            except (QueryError, ScanError, CapabilityCheckError) as exc:
                if not skip_errors:
                    raise
                nb_skipped += 1
                log_warn(f"Skipped {table}: {exc}", quiet=quiet)
                continue
            results[table] = result
            log_done(
                f"{table}: {result.nb_row} row(s), {result.sampling}",
                quiet=quiet,
                start_time=table_start,
            )
    finally:
        if owns_connection:
            con.disconnect()

    log_summary(len(results), nb_skipped, quiet=quiet, start_time=start_time)
    return results
