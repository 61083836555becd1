"""Domain models for declaring SQL Server tables (logical schema + temporal flag)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pyspark.sql.types as T

from src.constants import PERIOD_COLUMNS
from src.temporal_engine.identifiers import (
    QualifiedName,
    build_primary_key_name,
    parse_qualified_name,
)


@dataclass(frozen=True)
class Column:
    """
    Declarative column definition.

    `data_type` is a Spark logical type; the SQL Server type is derived from it
    unless `store_type` overrides it verbatim (e.g. "UNIQUEIDENTIFIER").
    """

    name: str
    data_type: T.DataType
    is_nullable: bool = True
    max_length: int | None = None
    store_type: str | None = None
    is_identity: bool = False
    default_sql: str | None = None

    @property
    def is_period_column(self) -> bool:
        """True for the two engine-maintained SysStartTime/SysEndTime columns."""
        return self.name in PERIOD_COLUMNS


@dataclass(frozen=True)
class Table:
    """Declarative table definition."""

    name: str
    columns: Sequence[Column]
    primary_key: Sequence[str] | None = None
    primary_key_is_clustered: bool = True

    # --------- Convenience properties ---------

    @property
    def table_name(self) -> QualifiedName:
        """Parsed two-part name."""
        return parse_qualified_name(self.name)

    @property
    def column_names(self) -> tuple[str, ...]:
        """Column names in declared order."""
        return tuple(column.name for column in self.columns)

    @property
    def primary_key_columns(self) -> tuple[str, ...]:
        """Primary-key column names (empty tuple if none)."""
        return tuple(self.primary_key) if self.primary_key else tuple()

    @property
    def primary_key_name(self) -> str | None:
        """Conventional PK constraint name, or None if no primary key is declared."""
        if not self.primary_key_columns:
            return None
        return build_primary_key_name(self.table_name)
