"""
Map Spark logical types onto SQL Server column types.

Columns are declared with `pyspark.sql.types`; this module is the single place
that decides how each one is spelled in T-SQL.
"""

from __future__ import annotations

from typing import Final

import pyspark.sql.types as T

from src.temporal_engine.errors import InvalidInputError
from src.temporal_engine.models import Column

_MAX: Final[str] = "MAX"
_MAX_NVARCHAR_LENGTH: Final[int] = 4000
_MAX_VARBINARY_LENGTH: Final[int] = 8000

_SIMPLE_TYPES: Final[dict[type[T.DataType], str]] = {
    T.BooleanType: "BIT",
    T.ByteType: "TINYINT",
    T.ShortType: "SMALLINT",
    T.IntegerType: "INT",
    T.LongType: "BIGINT",
    T.FloatType: "REAL",
    T.DoubleType: "FLOAT",
    T.DateType: "DATE",
    T.TimestampType: "DATETIMEOFFSET(7)",
    T.TimestampNTZType: "DATETIME2(7)",
}


def _length(column: Column, limit: int) -> str:
    """Length facet: explicit size up to `limit`, otherwise MAX."""
    if column.max_length is None or column.max_length > limit:
        return _MAX
    if column.max_length <= 0:
        raise InvalidInputError(
            f"Column {column.name!r} has invalid max_length {column.max_length}."
        )
    return str(column.max_length)


def render_sql_type(column: Column) -> str:
    """Return the SQL Server type for `column`, e.g. NVARCHAR(50) or DECIMAL(18, 2)."""
    if column.store_type:
        return column.store_type

    data_type = column.data_type
    simple = _SIMPLE_TYPES.get(type(data_type))
    if simple is not None:
        return simple
    if isinstance(data_type, T.DecimalType):
        return f"DECIMAL({data_type.precision}, {data_type.scale})"
    if isinstance(data_type, T.VarcharType):
        return f"NVARCHAR({data_type.length})"
    if isinstance(data_type, T.CharType):
        return f"NCHAR({data_type.length})"
    if isinstance(data_type, T.StringType):
        return f"NVARCHAR({_length(column, _MAX_NVARCHAR_LENGTH)})"
    if isinstance(data_type, T.BinaryType):
        return f"VARBINARY({_length(column, _MAX_VARBINARY_LENGTH)})"

    raise InvalidInputError(
        f"Column {column.name!r} has type {data_type.simpleString()!r} "
        "which has no SQL Server equivalent; set store_type explicitly."
    )
