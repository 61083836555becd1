"""
Schema operations: immutable, declarative changes targeting a single table.

Conventions
-----------
- Every operation is tied to one `table_name` (QualifiedName).
- Verbs: Create*/Alter*/Rename*/Drop* mirror the DDL they produce.
- The history-table annotation is a typed field, never a key in a loose bag:
    CreateTable.history_table_name: None → plain table; "DEFAULT" → derived name;
                                    anything else → explicit history table name.
    AlterTable.history_table_annotation: None → temporal concern untouched;
                                         AnnotationValues(old, new) → transition.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.models import Column
from src.temporal_engine.temporal.annotations import AnnotationValues

# ---------- base ----------


@dataclass(frozen=True)
class Operation:
    """Base schema operation tied to a single table."""

    table_name: QualifiedName


# ---------- payloads ----------


@dataclass(frozen=True)
class PrimaryKey:
    """PRIMARY KEY constraint; clustered unless stated otherwise."""

    name: str
    columns: tuple[str, ...]  # ordered
    is_clustered: bool = True


# ---------- operations ----------


@dataclass(frozen=True)
class CreateTable(Operation):
    """CREATE TABLE, optionally as a system-versioned temporal table."""

    columns: tuple[Column, ...]
    primary_key: PrimaryKey | None = None
    history_table_name: str | None = None


@dataclass(frozen=True)
class AlterTable(Operation):
    """
    ALTER TABLE. The history-table transition (if any) is handled first, then
    the ordinary column changes in this same operation.
    """

    history_table_annotation: AnnotationValues | None = None
    add_columns: tuple[Column, ...] = ()
    alter_columns: tuple[Column, ...] = ()
    drop_columns: tuple[str, ...] = ()


@dataclass(frozen=True)
class RenameTable(Operation):
    """Rename a table within its schema. `new_name` is the bare new table name."""

    new_name: str


@dataclass(frozen=True)
class DropTable(Operation):
    """DROP TABLE; a temporal table carries its history-table annotation."""

    history_table_name: str | None = None
