import pyspark.sql.types as T
import pytest

from src.temporal_engine.errors import InvalidInputError
from src.temporal_engine.generate.base_generator import SqlServerDdlGenerator, rename_target
from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.models import Column
from src.temporal_engine.plan.operations import (
    AlterTable,
    CreateTable,
    DropTable,
    Operation,
    PrimaryKey,
    RenameTable,
)

TABLE = QualifiedName("Customers", "sales")


@pytest.fixture
def base():
    return SqlServerDdlGenerator()


def test_create_table_renders_columns_and_primary_key(base):
    op = CreateTable(
        table_name=TABLE,
        columns=(
            Column("Id", T.IntegerType(), is_nullable=False, is_identity=True),
            Column("Name", T.StringType(), max_length=100),
        ),
        primary_key=PrimaryKey("PK_sales.Customers", ("Id",)),
    )

    assert base.create_table(op) == [
        "CREATE TABLE [sales].[Customers] (\n"
        "    [Id] INT IDENTITY(1,1) NOT NULL,\n"
        "    [Name] NVARCHAR(100),\n"
        "    CONSTRAINT [PK_sales.Customers] PRIMARY KEY ([Id])\n"
        ");"
    ]


def test_create_table_keeps_period_columns_as_ordinary_columns(base):
    op = CreateTable(
        table_name=TABLE,
        columns=(Column("SysStartTime", T.TimestampNTZType(), is_nullable=False),),
    )
    (statement,) = base.create_table(op)
    assert "[SysStartTime] DATETIME2(7) NOT NULL" in statement
    assert "SYSTEM_VERSIONING" not in statement


def test_create_table_without_columns_is_rejected(base):
    with pytest.raises(InvalidInputError, match="sales.Customers"):
        base.create_table(CreateTable(table_name=TABLE, columns=()))


def test_alter_table_orders_add_alter_drop(base):
    op = AlterTable(
        table_name=TABLE,
        add_columns=(Column("Email", T.StringType(), max_length=256),),
        alter_columns=(Column("Name", T.StringType(), max_length=200, is_nullable=False),),
        drop_columns=("Fax", "Pager"),
    )
    assert base.alter_table(op) == [
        "ALTER TABLE [sales].[Customers] ADD [Email] NVARCHAR(256);",
        "ALTER TABLE [sales].[Customers] ALTER COLUMN [Name] NVARCHAR(200) NOT NULL;",
        "ALTER TABLE [sales].[Customers] DROP COLUMN [Fax], COLUMN [Pager];",
    ]


def test_alter_table_without_changes_is_empty(base):
    assert base.alter_table(AlterTable(table_name=TABLE)) == []


def test_rename_table(base):
    assert base.rename_table(RenameTable(table_name=TABLE, new_name="Clients")) == [
        "EXECUTE sp_rename @objname = N'sales.Customers', @newname = N'Clients', "
        "@objtype = N'OBJECT';"
    ]


def test_drop_table(base):
    assert base.drop_table(DropTable(table_name=TABLE)) == ["DROP TABLE [sales].[Customers];"]


def test_generate_dispatches_on_operation_type(base):
    assert base.generate(DropTable(table_name=TABLE)) == ["DROP TABLE [sales].[Customers];"]


def test_generate_rejects_unknown_operations(base):
    with pytest.raises(InvalidInputError, match="Operation"):
        base.generate(Operation(table_name=TABLE))


# ---- rename target ----


def test_rename_target_stays_in_schema():
    assert rename_target(RenameTable(table_name=TABLE, new_name="Clients")) == QualifiedName(
        "Clients", "sales"
    )


def test_rename_target_accepts_same_schema_qualified_name():
    op = RenameTable(table_name=TABLE, new_name="sales.Clients")
    assert rename_target(op) == QualifiedName("Clients", "sales")


def test_rename_target_rejects_schema_move():
    op = RenameTable(table_name=TABLE, new_name="archive.Clients")
    with pytest.raises(InvalidInputError, match="another schema"):
        rename_target(op)
