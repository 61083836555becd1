import pytest

from src.temporal_engine.errors import InvalidInputError, MissingMetadataError
from src.temporal_engine.identifiers import QualifiedName
from src.temporal_engine.model.registry import TemporalTableConfig, build_temporal_registry


def test_config_annotation_defaults_when_blank():
    assert TemporalTableConfig("dbo.Products").annotation == "DEFAULT"
    assert TemporalTableConfig("dbo.Products", " ").annotation == "DEFAULT"
    assert TemporalTableConfig("dbo.Products", " audit.Trail ").annotation == "audit.Trail"


def test_registry_lookup_treats_missing_schema_as_default():
    registry = build_temporal_registry([TemporalTableConfig("Products")])

    assert registry.is_temporal(QualifiedName("Products", "dbo"))
    assert QualifiedName("Products") in registry
    assert not registry.is_temporal(QualifiedName("Products", "sales"))
    assert len(registry) == 1


def test_registry_annotations():
    registry = build_temporal_registry(
        [
            TemporalTableConfig("dbo.Products"),
            TemporalTableConfig("sales.Orders", "audit.OrderTrail"),
        ]
    )

    assert registry.history_table_annotation(QualifiedName("Products")) == "DEFAULT"
    assert registry.annotation_or_none(QualifiedName("Orders", "sales")) == "audit.OrderTrail"
    assert registry.annotation_or_none(QualifiedName("Customers")) is None
    assert list(registry) == [QualifiedName("Products"), QualifiedName("Orders", "sales")]


def test_unregistered_table_has_no_annotation():
    registry = build_temporal_registry([])
    with pytest.raises(MissingMetadataError, match="dbo.Customers"):
        registry.history_table_annotation(QualifiedName("Customers"))


def test_registry_resolves_history_table_names(singularizer):
    registry = build_temporal_registry(
        [
            TemporalTableConfig("dbo.Products"),
            TemporalTableConfig("sales.Orders", "OrderTrail"),
        ]
    )

    assert registry.resolve_history_table_name(
        QualifiedName("Products"), singularizer
    ) == QualifiedName("ProductHistory", "dbo")
    assert registry.resolve_history_table_name(
        QualifiedName("Orders", "sales"), singularizer
    ) == QualifiedName("OrderTrail", "sales")


def test_identical_duplicates_are_accepted():
    registry = build_temporal_registry(
        [TemporalTableConfig("Products"), TemporalTableConfig("dbo.Products", "DEFAULT")]
    )
    assert len(registry) == 1


def test_conflicting_duplicates_are_rejected():
    with pytest.raises(InvalidInputError, match="conflicting history tables"):
        build_temporal_registry(
            [TemporalTableConfig("dbo.Products"), TemporalTableConfig("dbo.Products", "Trail")]
        )


def test_empty_table_name_is_rejected():
    with pytest.raises(InvalidInputError):
        build_temporal_registry([TemporalTableConfig(" ")])


def test_registry_is_read_only():
    registry = build_temporal_registry([TemporalTableConfig("dbo.Products")])
    with pytest.raises(TypeError):
        registry.tables[QualifiedName("Orders")] = "DEFAULT"  # type: ignore[index]
