import pyspark.sql.types as T

from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.model.builders import (
    build_create_table,
    build_create_tables,
    plan_history_changes,
)
from src.temporal_engine.model.registry import TemporalTableConfig, build_temporal_registry
from src.temporal_engine.models import Column, Table
from src.temporal_engine.plan.operations import AlterTable, PrimaryKey
from src.temporal_engine.temporal.annotations import AnnotationValues

PRODUCTS = Table(
    name="dbo.Products",
    columns=[
        Column("Id", T.IntegerType(), is_nullable=False),
        Column("Name", T.StringType(), max_length=50),
    ],
    primary_key=["Id"],
)
ORDERS = Table(
    name="sales.Orders",
    columns=[Column("Id", T.LongType(), is_nullable=False)],
    primary_key=["Id"],
    primary_key_is_clustered=False,
)


def test_build_create_table_for_temporal_table():
    registry = build_temporal_registry([TemporalTableConfig("Products")])

    op = build_create_table(PRODUCTS, registry)

    assert op.table_name == QualifiedName("Products", "dbo")
    assert op.columns == tuple(PRODUCTS.columns)
    assert op.primary_key == PrimaryKey(name="PK_dbo.Products", columns=("Id",))
    assert op.history_table_name == "DEFAULT"


def test_build_create_table_for_plain_table():
    op = build_create_table(ORDERS, build_temporal_registry([]))

    assert op.history_table_name is None
    assert op.primary_key == PrimaryKey(
        name="PK_sales.Orders", columns=("Id",), is_clustered=False
    )


def test_build_create_table_without_primary_key():
    table = Table(name="Logs", columns=[Column("Line", T.StringType())])
    assert build_create_table(table, build_temporal_registry([])).primary_key is None


def test_build_create_tables_keeps_order():
    registry = build_temporal_registry([TemporalTableConfig("sales.Orders", "audit.OrderTrail")])
    ops = build_create_tables([PRODUCTS, ORDERS], registry)

    assert [op.table_name.name for op in ops] == ["Products", "Orders"]
    assert [op.history_table_name for op in ops] == [None, "audit.OrderTrail"]


def test_plan_history_changes_covers_every_transition():
    products, orders, customers, items = (
        QualifiedName("Products"),
        QualifiedName("Orders", "sales"),
        QualifiedName("Customers"),
        QualifiedName("Items"),
    )
    previous = build_temporal_registry(
        [
            TemporalTableConfig("Products"),
            TemporalTableConfig("sales.Orders"),
            TemporalTableConfig("Items"),
        ]
    )
    current = build_temporal_registry(
        [
            TemporalTableConfig("Products"),
            TemporalTableConfig("sales.Orders", "OrderTrail"),
            TemporalTableConfig("Customers"),
        ]
    )

    changes = plan_history_changes(previous, current, [products, orders, customers, items])

    assert changes == (
        AlterTable(orders, history_table_annotation=AnnotationValues("DEFAULT", "OrderTrail")),
        AlterTable(customers, history_table_annotation=AnnotationValues(None, "DEFAULT")),
        AlterTable(items, history_table_annotation=AnnotationValues("DEFAULT", None)),
    )
