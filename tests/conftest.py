import pyspark.sql.types as T
import pytest

from src.temporal_engine.generate.temporal_generator import TemporalDdlGenerator
from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.models import Column
from src.temporal_engine.plan.operations import CreateTable, PrimaryKey


class FakeSingularizer:
    """Drops one trailing 's' and records every word it was asked about."""

    def __init__(self):
        self.calls = []

    def singularize(self, word: str) -> str:
        self.calls.append(word)
        return word[:-1] if word.endswith("s") else word


@pytest.fixture
def singularizer():
    return FakeSingularizer()


@pytest.fixture
def generator(singularizer):
    return TemporalDdlGenerator(singularizer=singularizer)


@pytest.fixture
def products_name():
    return QualifiedName(name="Products", schema="dbo")


def make_product_columns() -> tuple[Column, ...]:
    return (
        Column(name="Id", data_type=T.StringType(), is_nullable=False, store_type="UNIQUEIDENTIFIER"),
        Column(name="Name", data_type=T.StringType(), max_length=50),
        Column(name="EanCode", data_type=T.StringType()),
        Column(name="SysStartTime", data_type=T.TimestampNTZType(), is_nullable=False),
        Column(name="SysEndTime", data_type=T.TimestampNTZType(), is_nullable=False),
    )


@pytest.fixture
def create_products(products_name):
    def _make(history_table_name="DEFAULT", **overrides) -> CreateTable:
        base = dict(
            table_name=products_name,
            columns=make_product_columns(),
            primary_key=PrimaryKey(name="PK_dbo.Products", columns=("Id",)),
            history_table_name=history_table_name,
        )
        base.update(overrides)
        return CreateTable(**base)

    return _make
