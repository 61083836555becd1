"""
Registry of temporal tables.

Built once, from explicit `TemporalTableConfig` records, before any DDL is
generated; read-only afterwards, so it can be shared freely between readers.

Conventions
-----------
- Keys are QualifiedName values; ``Products`` and ``dbo.Products`` are the same key.
- Values are the raw history-table annotation ("DEFAULT" or an explicit name),
  exactly what a CreateTable operation carries.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from src.constants import DEFAULT_HISTORY_TABLE_NAME
from src.logger import LOGGER
from src.temporal_engine.errors import InvalidInputError, MissingMetadataError
from src.temporal_engine.identifiers import (
    QualifiedName,
    format_schema_qualified_name,
    parse_qualified_name,
)
from src.temporal_engine.temporal.history_names import Singularizer, resolve_history_table_name
from src.temporal_engine.utils import check_not_empty, is_blank


@dataclass(frozen=True)
class TemporalTableConfig:
    """
    Marks one table as temporal.

    table_name:
        'schema.Table' or 'Table' (default schema).
    history_table_name:
        None/blank → derived default name; otherwise the history table name,
        optionally schema-qualified.
    """

    table_name: str
    history_table_name: str | None = None

    @property
    def annotation(self) -> str:
        """The history-table annotation value this config produces."""
        if is_blank(self.history_table_name):
            return DEFAULT_HISTORY_TABLE_NAME
        return self.history_table_name.strip()


@dataclass(frozen=True)
class TemporalRegistry:
    """Immutable mapping: table → history-table annotation."""

    tables: Mapping[QualifiedName, str]

    def __contains__(self, table_name: object) -> bool:
        return table_name in self.tables

    def __iter__(self) -> Iterator[QualifiedName]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def is_temporal(self, table_name: QualifiedName) -> bool:
        """True when `table_name` was registered as temporal."""
        return table_name in self.tables

    def history_table_annotation(self, table_name: QualifiedName) -> str:
        """
        The raw annotation for a registered table.

        Raises:
            MissingMetadataError: the table is not registered as temporal.
        """
        try:
            return self.tables[table_name]
        except KeyError:
            raise MissingMetadataError(
                f"Table {format_schema_qualified_name(table_name)!r} is not registered "
                "as a temporal table."
            ) from None

    def annotation_or_none(self, table_name: QualifiedName) -> str | None:
        """The raw annotation, or None for tables that are not temporal."""
        return self.tables.get(table_name)

    def resolve_history_table_name(
        self, table_name: QualifiedName, singularizer: Singularizer | None = None
    ) -> QualifiedName:
        """Schema-qualified history table for a registered table."""
        annotation = self.history_table_annotation(table_name)
        return resolve_history_table_name(table_name, annotation, singularizer)


def build_temporal_registry(configs: Iterable[TemporalTableConfig]) -> TemporalRegistry:
    """
    Build the registry in one pass.

    The same table may be listed more than once with the same annotation;
    listing it with two different history tables is a configuration error.

    Raises:
        InvalidInputError: conflicting history table names for one table.
    """
    tables: dict[QualifiedName, str] = {}
    for config in configs:
        table_name = parse_qualified_name(check_not_empty(config.table_name, "Table name"))
        annotation = config.annotation
        existing = tables.get(table_name)
        if existing is not None and existing != annotation:
            raise InvalidInputError(
                f"Temporal table {format_schema_qualified_name(table_name)!r} is configured "
                f"with conflicting history tables {existing!r} and {annotation!r}."
            )
        tables[table_name] = annotation

    LOGGER.debug("Registered %d temporal table(s).", len(tables))
    return TemporalRegistry(tables=MappingProxyType(tables))
