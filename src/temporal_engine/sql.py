"""
SQL string builders for SQL Server DDL.

All functions return complete, directly executable T-SQL statements (or None
for no-ops). Table names are QualifiedName values and are always rendered
schema-qualified and bracket-quoted.

Design guarantees
- Deterministic, side-effect free string generation.
- Proper identifier quoting and SQL literal escaping.
- No business rules: the generators decide which statements to emit and in what order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.constants import PERIOD_END_COLUMN, PERIOD_START_COLUMN
from src.temporal_engine.errors import InvalidInputError
from src.temporal_engine.identifiers import (
    QualifiedName,
    format_schema_qualified_name,
    quote_identifier,
    quote_qualified_name,
)
from src.temporal_engine.models import Column
from src.temporal_engine.plan.operations import PrimaryKey
from src.temporal_engine.types import render_sql_type
from src.temporal_engine.utils import check_not_empty, escape_sql_literal

INDENT = "    "


# ---------- fragments ----------


def sql_column_definition(column: Column) -> str:
    """Render: [name] TYPE [IDENTITY(1,1)] [NOT NULL] [DEFAULT (...)]"""
    check_not_empty(column.name, "Column name")
    parts = [quote_identifier(column.name), render_sql_type(column)]
    if column.is_identity:
        parts.append("IDENTITY(1,1)")
    if not column.is_nullable:
        parts.append("NOT NULL")
    if column.default_sql:
        parts.append(f"DEFAULT ({column.default_sql})")
    return " ".join(parts)


def sql_primary_key_constraint(primary_key: PrimaryKey) -> str:
    """CONSTRAINT [name] PRIMARY KEY [NONCLUSTERED] ([c1], [c2])"""
    check_not_empty(primary_key.name, "Primary key name")
    if not primary_key.columns:
        raise InvalidInputError(
            f"Primary key {primary_key.name!r} requires at least one column."
        )
    columns = ", ".join(quote_identifier(c) for c in primary_key.columns)
    clustering = "" if primary_key.is_clustered else "NONCLUSTERED "
    return f"CONSTRAINT {quote_identifier(primary_key.name)} PRIMARY KEY {clustering}({columns})"


def sql_period_column_definitions() -> tuple[str, str, str]:
    """The two generated-always period columns and the PERIOD FOR SYSTEM_TIME declaration."""
    start = quote_identifier(PERIOD_START_COLUMN)
    end = quote_identifier(PERIOD_END_COLUMN)
    return (
        f"{start} DATETIME2 (7) GENERATED ALWAYS AS ROW START",
        f"{end} DATETIME2 (7) GENERATED ALWAYS AS ROW END",
        f"PERIOD FOR SYSTEM_TIME ({start}, {end})",
    )


def sql_system_versioning_on(history_table_name: QualifiedName) -> str:
    """WITH clause naming the history table (schema-qualified, bracketed only where needed)."""
    history = format_schema_qualified_name(history_table_name)
    return f"WITH (SYSTEM_VERSIONING = ON (HISTORY_TABLE = {history}))"


# ---------- create / drop ----------


def sql_create_table(
    table_name: QualifiedName,
    body_lines: Sequence[str],
    table_options: str | None = None,
) -> str:
    """
    CREATE TABLE [s].[t] (
        <line>,
        <line>
    ) [options];
    """
    body = f",\n{INDENT}".join(body_lines)
    closing = f") {table_options};" if table_options else ");"
    return f"CREATE TABLE {quote_qualified_name(table_name)} (\n{INDENT}{body}\n{closing}"


def sql_drop_table(table_name: QualifiedName) -> str:
    """DROP TABLE [s].[t];"""
    return f"DROP TABLE {quote_qualified_name(table_name)};"


# ---------- columns ----------


def sql_add_column(table_name: QualifiedName, column: Column) -> str:
    """ALTER TABLE ... ADD <column definition>;"""
    return f"ALTER TABLE {quote_qualified_name(table_name)} ADD {sql_column_definition(column)};"


def sql_alter_column(table_name: QualifiedName, column: Column) -> str:
    """ALTER TABLE ... ALTER COLUMN [c] TYPE [NOT NULL];"""
    check_not_empty(column.name, "Column name")
    null_sql = " NULL" if column.is_nullable else " NOT NULL"
    return (
        f"ALTER TABLE {quote_qualified_name(table_name)} "
        f"ALTER COLUMN {quote_identifier(column.name)} {render_sql_type(column)}{null_sql};"
    )


def sql_drop_columns(table_name: QualifiedName, column_names: Iterable[str]) -> str | None:
    """ALTER TABLE ... DROP COLUMN [a], COLUMN [b]; Returns None if no names."""
    columns = [
        f"COLUMN {quote_identifier(check_not_empty(name, 'Column name'))}"
        for name in column_names
    ]
    if not columns:
        return None
    return f"ALTER TABLE {quote_qualified_name(table_name)} DROP {', '.join(columns)};"


# ---------- rename ----------


def sql_rename_object(object_name: QualifiedName, new_name: str) -> str:
    """EXECUTE sp_rename for a schema-qualified object; the new name is bare."""
    old = escape_sql_literal(format_schema_qualified_name(object_name))
    new = escape_sql_literal(check_not_empty(new_name, "New object name"))
    return f"EXECUTE sp_rename @objname = N'{old}', @newname = N'{new}', @objtype = N'OBJECT';"


# ---------- system versioning ----------


def sql_set_system_versioning_off(table_name: QualifiedName) -> str:
    """ALTER TABLE ... SET (SYSTEM_VERSIONING = OFF);"""
    return f"ALTER TABLE {quote_qualified_name(table_name)} SET (SYSTEM_VERSIONING = OFF);"


def sql_drop_period(table_name: QualifiedName) -> str:
    """ALTER TABLE ... DROP PERIOD FOR SYSTEM_TIME;"""
    return f"ALTER TABLE {quote_qualified_name(table_name)} DROP PERIOD FOR SYSTEM_TIME;"


def sql_drop_period_columns(table_name: QualifiedName) -> str:
    """ALTER TABLE ... DROP COLUMN [SysStartTime], COLUMN [SysEndTime];"""
    start = quote_identifier(PERIOD_START_COLUMN)
    end = quote_identifier(PERIOD_END_COLUMN)
    return f"ALTER TABLE {quote_qualified_name(table_name)} DROP COLUMN {start}, COLUMN {end};"
