"""
Base DDL generator for ordinary (non-temporal) SQL Server tables.

`SqlServerDdlGenerator` turns one schema operation into the list of T-SQL
statements that implements it. It knows nothing about system versioning; the
temporal generator wraps it and hands over every operation, or every part of an
operation, that has no temporal concern.
"""

from __future__ import annotations

from typing import Protocol

from src.logger import LOGGER
from src.temporal_engine.errors import InvalidInputError
from src.temporal_engine.identifiers import (
    QualifiedName,
    format_schema_qualified_name,
    parse_qualified_name,
)
from src.temporal_engine.plan.operations import (
    AlterTable,
    CreateTable,
    DropTable,
    Operation,
    RenameTable,
)
from src.temporal_engine.sql import (
    sql_add_column,
    sql_alter_column,
    sql_column_definition,
    sql_create_table,
    sql_drop_columns,
    sql_drop_table,
    sql_primary_key_constraint,
    sql_rename_object,
)


class DdlGenerator(Protocol):
    """Anything that can render schema operations as SQL Server DDL."""

    def create_table(self, operation: CreateTable) -> list[str]: ...

    def alter_table(self, operation: AlterTable) -> list[str]: ...

    def rename_table(self, operation: RenameTable) -> list[str]: ...

    def drop_table(self, operation: DropTable) -> list[str]: ...


def rename_target(operation: RenameTable) -> QualifiedName:
    """
    The table's name after the rename: same schema, new name.

    Raises:
        InvalidInputError: `new_name` names a different schema; sp_rename cannot move
            a table between schemas.
    """
    new_name = parse_qualified_name(operation.new_name)
    if new_name.schema and new_name.schema != operation.table_name.effective_schema:
        raise InvalidInputError(
            f"Cannot rename table {format_schema_qualified_name(operation.table_name)!r} "
            f"to {operation.new_name!r}: renaming cannot move a table to another schema."
        )
    return QualifiedName(name=new_name.name, schema=operation.table_name.schema)


class SqlServerDdlGenerator:
    """Render schema operations for regular SQL Server tables."""

    def generate(self, operation: Operation) -> list[str]:
        """Dispatch on operation type."""
        if isinstance(operation, CreateTable):
            return self.create_table(operation)
        if isinstance(operation, AlterTable):
            return self.alter_table(operation)
        if isinstance(operation, RenameTable):
            return self.rename_table(operation)
        if isinstance(operation, DropTable):
            return self.drop_table(operation)
        raise InvalidInputError(f"Unsupported schema operation: {type(operation).__name__}")

    # ---------- create ----------

    def create_table(self, operation: CreateTable) -> list[str]:
        """CREATE TABLE with columns and an optional PRIMARY KEY."""
        body_lines = [sql_column_definition(column) for column in operation.columns]
        if operation.primary_key is not None:
            body_lines.append(sql_primary_key_constraint(operation.primary_key))
        if not body_lines:
            raise InvalidInputError(
                f"Table {format_schema_qualified_name(operation.table_name)!r} has no columns."
            )
        return [sql_create_table(operation.table_name, body_lines)]

    # ---------- alter ----------

    def alter_table(self, operation: AlterTable) -> list[str]:
        """
        Column changes in a safe order:
          1) add columns
          2) alter columns
          3) drop columns (single statement)
        """
        statements = [sql_add_column(operation.table_name, c) for c in operation.add_columns]
        statements.extend(
            sql_alter_column(operation.table_name, c) for c in operation.alter_columns
        )
        drop = sql_drop_columns(operation.table_name, operation.drop_columns)
        if drop is not None:
            statements.append(drop)
        if not statements:
            LOGGER.debug(
                "No column changes for %s.", format_schema_qualified_name(operation.table_name)
            )
        return statements

    # ---------- rename / drop ----------

    def rename_table(self, operation: RenameTable) -> list[str]:
        """EXECUTE sp_rename of the table to its new bare name."""
        new_table_name = rename_target(operation)
        return [sql_rename_object(operation.table_name, new_table_name.name)]

    def drop_table(self, operation: DropTable) -> list[str]:
        """DROP TABLE."""
        return [sql_drop_table(operation.table_name)]
