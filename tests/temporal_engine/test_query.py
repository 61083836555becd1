from datetime import datetime, timedelta, timezone

import pytest

from src.temporal_engine.errors import InvalidInputError, MissingMetadataError
from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.model.registry import TemporalTableConfig, build_temporal_registry
from src.temporal_engine.query import read_as_of, sql_select_as_of, to_utc_naive

PRODUCTS = QualifiedName("Products", "dbo")


class FakeCursor:
    def __init__(self, rows, batch_size=2):
        self._batches = [rows[i : i + batch_size] for i in range(0, len(rows), batch_size)]
        self.executed = []
        self.closed = False

    def execute(self, operation, parameters=()):
        self.executed.append((operation, parameters))

    def fetchmany(self, size=1):
        return self._batches.pop(0) if self._batches else []

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rows):
        self.rows = rows
        self.cursors = []

    def cursor(self):
        cursor = FakeCursor(self.rows)
        self.cursors.append(cursor)
        return cursor


ROWS = [(1, "Apple"), (2, "Pear"), (3, "Plum")]


def test_select_statement_calls_as_of_function():
    assert sql_select_as_of(PRODUCTS) == "SELECT * FROM [dbo].[efttProductsAsOf](?)"


def test_to_utc_naive_converts_aware_timestamps():
    aware = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc_naive(aware) == datetime(2024, 5, 1, 12, 30)


def test_to_utc_naive_keeps_naive_timestamps():
    naive = datetime(2024, 5, 1, 12, 30)
    assert to_utc_naive(naive) is naive


def test_to_utc_naive_rejects_non_datetimes():
    with pytest.raises(InvalidInputError):
        to_utc_naive("2024-05-01")  # type: ignore[arg-type]


def test_read_as_of_yields_every_row_with_utc_parameter():
    connection = FakeConnection(ROWS)
    ts = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    rows = list(read_as_of(connection, PRODUCTS, ts))

    assert rows == ROWS
    (cursor,) = connection.cursors
    assert cursor.executed == [
        ("SELECT * FROM [dbo].[efttProductsAsOf](?)", (datetime(2024, 5, 1, 12, 30),))
    ]
    assert cursor.closed


def test_read_as_of_is_lazy_and_single_use():
    connection = FakeConnection(ROWS)

    rows = read_as_of(connection, PRODUCTS, datetime(2024, 5, 1))
    assert connection.cursors == []

    assert next(rows) == (1, "Apple")
    assert list(rows) == [(2, "Pear"), (3, "Plum")]
    assert list(rows) == []
    assert len(connection.cursors) == 1


def test_abandoned_read_closes_cursor():
    connection = FakeConnection(ROWS)
    rows = read_as_of(connection, PRODUCTS, datetime(2024, 5, 1))

    next(rows)
    rows.close()

    assert connection.cursors[0].closed


def test_read_as_of_empty_result():
    assert list(read_as_of(FakeConnection([]), PRODUCTS, datetime(2024, 5, 1))) == []


def test_read_as_of_rejects_tables_the_registry_marks_plain():
    registry = build_temporal_registry([TemporalTableConfig("dbo.Orders")])
    connection = FakeConnection(ROWS)

    with pytest.raises(MissingMetadataError, match="dbo.Products"):
        read_as_of(connection, PRODUCTS, datetime(2024, 5, 1), registry=registry)
    assert connection.cursors == []


def test_read_as_of_rejects_bad_timestamp_eagerly():
    with pytest.raises(InvalidInputError):
        read_as_of(FakeConnection(ROWS), PRODUCTS, None)  # type: ignore[arg-type]
