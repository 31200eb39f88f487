"""Sample result entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import polars as pl

from .table import TableRef

# "random" when the dialect could sample randomly, "sequential" for a plain
# LIMIT scan returning the first rows in storage order
SamplingMethod = Literal["random", "sequential"]


@dataclass(frozen=True)
class SampleResult:
    """Column names and non-empty normalized values sampled from one table.

    ``column_values[i]`` holds the values observed for ``column_names[i]``.
    Null and empty values are dropped, so each column can hold fewer values
    than ``nb_row`` and columns can differ in length.
    """

    table: TableRef
    column_names: tuple[str, ...]
    column_values: tuple[tuple[str, ...], ...]
    column_kinds: tuple[str, ...]
    nb_row: int
    sampling: SamplingMethod

    def __post_init__(self) -> None:
        nb_columns = len(self.column_names)
        if len(self.column_values) != nb_columns:
            raise ValueError(
                f"Expected {nb_columns} value lists, got {len(self.column_values)}"
            )
        if len(self.column_kinds) != nb_columns:
            raise ValueError(
                f"Expected {nb_columns} column kinds, got {len(self.column_kinds)}"
            )

    def values(self, column: str) -> tuple[str, ...]:
        """Return the values sampled for a column name."""
        try:
            index = self.column_names.index(column)
        except ValueError:
            raise KeyError(f"Unknown column {column!r} in {self.table}") from None
        return self.column_values[index]

    def as_dict(self) -> dict[str, list[str]]:
        """Map column names to their values (later duplicates win)."""
        return {
            name: list(values)
            for name, values in zip(self.column_names, self.column_values)
        }

    def to_frame(self) -> pl.DataFrame:
        """Return values in long format with ``column`` and ``value`` columns."""
        columns: list[str] = []
        values: list[str] = []
        for name, column_values in zip(self.column_names, self.column_values):
            columns.extend([name] * len(column_values))
            values.extend(column_values)
        return pl.DataFrame(
            {"column": columns, "value": values},
            schema={"column": pl.Utf8, "value": pl.Utf8},
        )
