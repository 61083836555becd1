# src/temporal_engine/model/builders.py
"""
Adapters: user-facing Table + TemporalRegistry → schema operations.

Why this exists
---------------
Users declare tables with `models.Table` and mark the temporal ones through the
registry. The generators work on operations whose history-table annotation is
a typed field:

- CreateTable.history_table_name:
    None        → regular table
    "DEFAULT"   → temporal, derived history table name
    "s.Name"    → temporal, explicit history table

- AlterTable.history_table_annotation:
    None                     → temporal concern untouched
    AnnotationValues(o, n)   → history table added / renamed / removed

This module centralises the mapping so the rest of the engine never has to guess.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.model.registry import TemporalRegistry
from src.temporal_engine.models import Table
from src.temporal_engine.plan.operations import AlterTable, CreateTable, PrimaryKey
from src.temporal_engine.temporal.annotations import AnnotationValues


def _build_primary_key(table: Table) -> PrimaryKey | None:
    """PrimaryKey payload from the declared columns, or None without a key."""
    name = table.primary_key_name
    if name is None:
        return None
    return PrimaryKey(
        name=name,
        columns=table.primary_key_columns,
        is_clustered=table.primary_key_is_clustered,
    )


def build_create_table(table: Table, registry: TemporalRegistry) -> CreateTable:
    """CreateTable for one declared table, annotated when the registry marks it temporal."""
    table_name = table.table_name
    return CreateTable(
        table_name=table_name,
        columns=tuple(table.columns),
        primary_key=_build_primary_key(table),
        history_table_name=registry.annotation_or_none(table_name),
    )


def build_create_tables(
    tables: Iterable[Table], registry: TemporalRegistry
) -> tuple[CreateTable, ...]:
    """CreateTable operations in declared order."""
    return tuple(build_create_table(table, registry) for table in tables)


def plan_history_changes(
    previous: TemporalRegistry,
    current: TemporalRegistry,
    existing_tables: Iterable[QualifiedName],
) -> tuple[AlterTable, ...]:
    """
    AlterTable operations for every table whose history annotation differs
    between two model versions.

    Only `existing_tables` (tables present in both versions) are considered;
    new tables are created and removed tables dropped, not altered.
    """
    changes: list[AlterTable] = []
    for table_name in existing_tables:
        old = previous.annotation_or_none(table_name)
        new = current.annotation_or_none(table_name)
        if old == new:
            continue
        changes.append(
            AlterTable(
                table_name=table_name,
                history_table_annotation=AnnotationValues(old_value=old, new_value=new),
            )
        )
    return tuple(changes)
