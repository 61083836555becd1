"""
Point-in-time reads through the as-of function.

``read_as_of(connection, table, ts)`` runs
``SELECT * FROM [s].[efttXAsOf](?)`` on a DB-API 2.0 connection whose driver
uses the qmark parameter style (pyodbc) and yields the rows lazily. The
generator is finite and cannot be restarted; call `read_as_of` again for a
fresh read.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import datetime, timezone
from typing import Any, Protocol

from src.logger import LOGGER
from src.temporal_engine.errors import InvalidInputError, MissingMetadataError
from src.temporal_engine.identifiers import (
    QualifiedName,
    format_schema_qualified_name,
    quote_qualified_name,
)
from src.temporal_engine.model.registry import TemporalRegistry
from src.temporal_engine.temporal.functions import as_of_function_name

_FETCH_SIZE = 500


class Cursor(Protocol):
    def execute(self, operation: str, parameters: Sequence[Any] = ...) -> Any: ...

    def fetchmany(self, size: int = ...) -> Sequence[Sequence[Any]]: ...

    def close(self) -> None: ...


class Connection(Protocol):
    def cursor(self) -> Cursor: ...


def sql_select_as_of(table_name: QualifiedName) -> str:
    """SELECT from the as-of function with one positional (qmark) parameter."""
    return f"SELECT * FROM {quote_qualified_name(as_of_function_name(table_name))}(?)"


def to_utc_naive(timestamp: datetime) -> datetime:
    """DATETIME2 carries no offset: convert aware values to UTC, take naive ones as UTC."""
    if not isinstance(timestamp, datetime):
        raise InvalidInputError(f"Expected a datetime for an as-of read, got {timestamp!r}.")
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(timezone.utc).replace(tzinfo=None)


def read_as_of(
    connection: Connection,
    table_name: QualifiedName,
    utc_timestamp: datetime,
    registry: TemporalRegistry | None = None,
) -> Iterator[Sequence[Any]]:
    """
    Rows of `table_name` as they were at `utc_timestamp`.

    Raises:
        MissingMetadataError: `registry` is given and does not list the table as temporal.
    """
    if registry is not None and not registry.is_temporal(table_name):
        raise MissingMetadataError(
            f"Table {format_schema_qualified_name(table_name)!r} is not a temporal table; "
            "it has no as-of function."
        )
    statement = sql_select_as_of(table_name)
    parameter = to_utc_naive(utc_timestamp)
    return _iterate_rows(connection, statement, parameter)


def _iterate_rows(
    connection: Connection, statement: str, parameter: datetime
) -> Iterator[Sequence[Any]]:
    LOGGER.debug("Reading as of %s: %s", parameter.isoformat(), statement)
    cursor = connection.cursor()
    try:
        cursor.execute(statement, (parameter,))
        while True:
            rows = cursor.fetchmany(_FETCH_SIZE)
            if not rows:
                break
            yield from rows
    finally:
        cursor.close()
