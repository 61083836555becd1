"""
Temporal table DDL generator.

Wraps a base generator and adds SQL Server system versioning to tables that
carry the history-table annotation:

CREATE
  - No annotation → base generator, untouched.
  - Annotation → CREATE TABLE with the period columns generated always, the
    PERIOD FOR SYSTEM_TIME declaration and SYSTEM_VERSIONING = ON naming the
    history table, followed by the as-of function.

ALTER (annotation old → new, then the base column changes)
  - blank → set: rejected. Existing rows have no SysStartTime, so a populated
    table cannot be made temporal here.
  - set → set: rename the history table in place.
  - set → blank: versioning off, drop history table, drop period, drop the
    period columns, drop the as-of function.

RENAME
  - Base rename, then drop the old as-of function if it exists and create the
    one for the new name. Whether the table is temporal is not looked up; the
    object_id() guard makes the drop a no-op for regular tables.

DROP
  - Temporal tables switch versioning off and take their history table and
    as-of function with them.

Each operation's statements are built in full before anything is returned, so
a failure never leaves a partial statement list behind.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.constants import HISTORY_TABLE_ANNOTATION
from src.enums import TemporalTransition
from src.logger import LOGGER
from src.temporal_engine.errors import InvalidInputError, UnsupportedTransitionError
from src.temporal_engine.generate.base_generator import (
    DdlGenerator,
    SqlServerDdlGenerator,
    rename_target,
)
from src.temporal_engine.identifiers import QualifiedName, format_schema_qualified_name
from src.temporal_engine.model.registry import TemporalRegistry
from src.temporal_engine.plan.operations import (
    AlterTable,
    CreateTable,
    DropTable,
    Operation,
    RenameTable,
)
from src.temporal_engine.sql import (
    sql_column_definition,
    sql_create_table,
    sql_drop_period,
    sql_drop_period_columns,
    sql_drop_table,
    sql_period_column_definitions,
    sql_primary_key_constraint,
    sql_rename_object,
    sql_set_system_versioning_off,
    sql_system_versioning_on,
)
from src.temporal_engine.temporal.annotations import (
    AnnotationValues,
    classify_transition,
    is_temporal_annotation,
)
from src.temporal_engine.temporal.functions import (
    as_of_function_name,
    sql_create_as_of_function,
    sql_drop_function_if_exists,
)
from src.temporal_engine.temporal.history_names import (
    Singularizer,
    default_singularizer,
    resolve_history_table_name,
)


class TemporalDdlGenerator:
    """
    Render schema operations, adding system versioning where annotated.

    `registry` is optional. It is only used to skip re-creating the as-of
    function when a renamed table is known not to be temporal.
    """

    def __init__(
        self,
        base: DdlGenerator | None = None,
        singularizer: Singularizer | None = None,
        registry: TemporalRegistry | None = None,
    ) -> None:
        self._base: DdlGenerator = base or SqlServerDdlGenerator()
        self._singularizer: Singularizer = singularizer or default_singularizer()
        self._registry = registry

    # ---------- public API ----------

    def generate(self, operation: Operation) -> tuple[str, ...]:
        """All statements for one operation, in execution order."""
        LOGGER.debug(
            "Generating DDL for %s on %s.",
            type(operation).__name__,
            format_schema_qualified_name(operation.table_name),
        )
        if isinstance(operation, CreateTable):
            statements = self.create_table(operation)
        elif isinstance(operation, AlterTable):
            statements = self.alter_table(operation)
        elif isinstance(operation, RenameTable):
            statements = self.rename_table(operation)
        elif isinstance(operation, DropTable):
            statements = self.drop_table(operation)
        else:
            raise InvalidInputError(f"Unsupported schema operation: {type(operation).__name__}")
        return tuple(statements)

    def generate_all(self, operations: Iterable[Operation]) -> tuple[str, ...]:
        """Statements for every operation in order; raises before returning anything on failure."""
        statements: list[str] = []
        for operation in operations:
            statements.extend(self.generate(operation))
        LOGGER.info("Generated %d DDL statement(s).", len(statements))
        return tuple(statements)

    def history_table_name(
        self, table_name: QualifiedName, raw_annotation: str | None
    ) -> QualifiedName:
        """Resolved, schema-qualified history table for `table_name`."""
        return resolve_history_table_name(table_name, raw_annotation, self._singularizer)

    # ---------- create ----------

    def create_table(self, operation: CreateTable) -> list[str]:
        if not is_temporal_annotation(operation.history_table_name):
            return self._base.create_table(operation)

        table_name = operation.table_name
        history_table_name = self.history_table_name(table_name, operation.history_table_name)

        body_lines = [
            sql_column_definition(column)
            for column in operation.columns
            if not column.is_period_column
        ]
        body_lines.extend(sql_period_column_definitions())
        if operation.primary_key is not None:
            body_lines.append(sql_primary_key_constraint(operation.primary_key))
        else:
            LOGGER.warning(
                "Temporal table %s has no primary key; SQL Server requires one for "
                "system versioning.",
                format_schema_qualified_name(table_name),
            )

        LOGGER.info(
            "Creating temporal table %s with history table %s.",
            format_schema_qualified_name(table_name),
            format_schema_qualified_name(history_table_name),
        )
        return [
            sql_create_table(table_name, body_lines, sql_system_versioning_on(history_table_name)),
            sql_create_as_of_function(table_name),
        ]

    # ---------- alter ----------

    def alter_table(self, operation: AlterTable) -> list[str]:
        statements: list[str] = []
        if operation.history_table_annotation is not None:
            statements.extend(
                self._alter_history_annotation(
                    operation.table_name, operation.history_table_annotation
                )
            )
        statements.extend(self._base.alter_table(operation))
        return statements

    def _alter_history_annotation(
        self, table_name: QualifiedName, values: AnnotationValues
    ) -> list[str]:
        transition = classify_transition(table_name, values)

        if transition == TemporalTransition.BECOME_TEMPORAL:
            raise UnsupportedTransitionError(
                f"Cannot {transition.description} for {format_schema_qualified_name(table_name)!r} "
                f"({HISTORY_TABLE_ANNOTATION} {values.new_value!r} was added): SysStartTime "
                "is not available for existing records."
            )
        if transition == TemporalTransition.RENAME_HISTORY:
            return self._rename_history_table(table_name, values)
        return self._remove_system_versioning(table_name, values.old_value)

    def _rename_history_table(
        self, table_name: QualifiedName, values: AnnotationValues
    ) -> list[str]:
        old_history = self.history_table_name(table_name, values.old_value)
        new_history = self.history_table_name(table_name, values.new_value)

        if old_history == new_history:
            LOGGER.debug(
                "History table of %s stays %s; nothing to rename.",
                format_schema_qualified_name(table_name),
                format_schema_qualified_name(old_history),
            )
            return []
        if old_history.effective_schema != new_history.effective_schema:
            raise UnsupportedTransitionError(
                f"Cannot {TemporalTransition.RENAME_HISTORY.description} of "
                f"{format_schema_qualified_name(table_name)!r} from "
                f"{format_schema_qualified_name(old_history)!r} to "
                f"{format_schema_qualified_name(new_history)!r}: the "
                f"{HISTORY_TABLE_ANNOTATION} annotation moves it to another schema."
            )

        LOGGER.info(
            "Renaming history table %s to %s.",
            format_schema_qualified_name(old_history),
            new_history.name,
        )
        return [sql_rename_object(old_history, new_history.name)]

    def _remove_system_versioning(
        self, table_name: QualifiedName, old_annotation: str | None
    ) -> list[str]:
        # Order matters; an earlier step is not undone when a later one fails.
        history_table_name = self.history_table_name(table_name, old_annotation)
        LOGGER.info(
            "Converting temporal table %s to a regular table; dropping history table %s.",
            format_schema_qualified_name(table_name),
            format_schema_qualified_name(history_table_name),
        )
        return [
            sql_set_system_versioning_off(table_name),
            sql_drop_table(history_table_name),
            sql_drop_period(table_name),
            sql_drop_period_columns(table_name),
            sql_drop_function_if_exists(as_of_function_name(table_name)),
        ]

    # ---------- rename ----------

    def rename_table(self, operation: RenameTable) -> list[str]:
        new_table_name = rename_target(operation)
        statements = list(self._base.rename_table(operation))
        statements.append(sql_drop_function_if_exists(as_of_function_name(operation.table_name)))

        if self._registry is not None and not self._registry.is_temporal(new_table_name):
            LOGGER.debug(
                "Renamed table %s is not temporal; no as-of function to create.",
                format_schema_qualified_name(new_table_name),
            )
            return statements

        statements.append(sql_create_as_of_function(new_table_name))
        return statements

    # ---------- drop ----------

    def drop_table(self, operation: DropTable) -> list[str]:
        if not is_temporal_annotation(operation.history_table_name):
            return self._base.drop_table(operation)

        table_name = operation.table_name
        history_table_name = self.history_table_name(table_name, operation.history_table_name)
        LOGGER.info(
            "Dropping temporal table %s and history table %s.",
            format_schema_qualified_name(table_name),
            format_schema_qualified_name(history_table_name),
        )
        return [
            sql_set_system_versioning_off(table_name),
            *self._base.drop_table(operation),
            sql_drop_table(history_table_name),
            sql_drop_function_if_exists(as_of_function_name(table_name)),
        ]
