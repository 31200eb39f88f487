"""Table reference entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TableRef:
    """A table identified by schema and name (schema is empty for SQLite)."""

    schema: str
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Table name must not be empty")

    def __str__(self) -> str:
        return f"{self.schema}.{self.name}" if self.schema else self.name
