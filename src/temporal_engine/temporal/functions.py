"""
The as-of table-valued function that exposes point-in-time reads.

Every temporal table ``s.X`` gets ``s.efttXAsOf(@utcSystemTime)``, which returns
the rows of ``s.X`` as they were at that UTC instant. The function exists if and
only if its table is system-versioned. The generators keep it that way across
create, alter, rename and drop. They infer whether the function exists from its
name alone, so alter and rename never consult a registry.
"""

from __future__ import annotations

from src.constants import AS_OF_FUNCTION_PARAMETER, AS_OF_FUNCTION_PREFIX, AS_OF_FUNCTION_SUFFIX
from src.temporal_engine.identifiers import (
    QualifiedName,
    format_schema_qualified_name,
    quote_qualified_name,
)
from src.temporal_engine.sql import INDENT
from src.temporal_engine.utils import escape_sql_literal


def as_of_function_name(table_name: QualifiedName) -> QualifiedName:
    """``eftt<table>AsOf`` in the table's (effective) schema."""
    return QualifiedName(
        name=f"{AS_OF_FUNCTION_PREFIX}{table_name.name}{AS_OF_FUNCTION_SUFFIX}",
        schema=table_name.effective_schema,
    )


def sql_create_as_of_function(table_name: QualifiedName) -> str:
    """Inline TVF selecting every row of `table_name` FOR SYSTEM_TIME AS OF the parameter."""
    function = quote_qualified_name(as_of_function_name(table_name))
    table = quote_qualified_name(table_name)
    return (
        f"CREATE FUNCTION {function} ({AS_OF_FUNCTION_PARAMETER} DATETIME2) "
        f"RETURNS TABLE AS RETURN "
        f"SELECT * FROM {table} FOR SYSTEM_TIME AS OF {AS_OF_FUNCTION_PARAMETER};"
    )


def sql_drop_function(function_name: QualifiedName) -> str:
    """DROP FUNCTION [s].[f]; fails at execution time when the function is absent."""
    return f"DROP FUNCTION {quote_qualified_name(function_name)};"


def sql_drop_function_if_exists(function_name: QualifiedName) -> str:
    """Drop guarded by object_id(), a no-op when the function does not exist."""
    literal = escape_sql_literal(format_schema_qualified_name(function_name))
    return (
        f"IF object_id('{literal}') IS NOT NULL BEGIN\n"
        f"{INDENT}{sql_drop_function(function_name)}\n"
        "END"
    )
