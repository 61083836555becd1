"""
The history-table annotation: the one fact that makes a table temporal.

A CREATE carries a single value ("DEFAULT" or an explicit history table name).
An ALTER carries the value before and after the change; which of the two is
blank decides the transition:

    old     new
    blank → set    BECOME_TEMPORAL   (rejected by the generator)
    set   → set    RENAME_HISTORY
    set   → blank  REMOVE_TEMPORAL
    blank → blank  invalid; the annotation should not be attached at all

Migration authoring tools hand annotations over as a loose ``{key: value}``
mapping; `history_table_name_from_mapping` and `annotation_values_from_mapping`
lift them into the typed operation fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.constants import HISTORY_TABLE_ANNOTATION
from src.enums import TemporalTransition
from src.temporal_engine.errors import InvalidAnnotationStateError
from src.temporal_engine.identifiers import QualifiedName, format_schema_qualified_name
from src.temporal_engine.utils import is_blank


@dataclass(frozen=True)
class AnnotationValues:
    """Old and new history-table annotation values on an ALTER."""

    old_value: str | None = None
    new_value: str | None = None


def is_temporal_annotation(value: str | None) -> bool:
    """A non-blank annotation value is the sole signal that a table is temporal."""
    return not is_blank(value)


def classify_transition(
    table_name: QualifiedName, values: AnnotationValues
) -> TemporalTransition:
    """
    Decide which transition an ALTER's annotation pair describes.

    Raises:
        InvalidAnnotationStateError: both values are blank.
    """
    has_old = is_temporal_annotation(values.old_value)
    has_new = is_temporal_annotation(values.new_value)

    if has_old and has_new:
        return TemporalTransition.RENAME_HISTORY
    if has_new:
        return TemporalTransition.BECOME_TEMPORAL
    if has_old:
        return TemporalTransition.REMOVE_TEMPORAL

    raise InvalidAnnotationStateError(
        f"Old and new value of the {HISTORY_TABLE_ANNOTATION} annotation on table "
        f"{format_schema_qualified_name(table_name)!r} cannot both be empty."
    )


def history_table_name_from_mapping(annotations: Mapping[str, Any] | None) -> str | None:
    """Extract the CREATE-time history table name from a loose annotation mapping."""
    if not annotations:
        return None
    value = annotations.get(HISTORY_TABLE_ANNOTATION)
    return value if isinstance(value, str) else None


def annotation_values_from_mapping(
    annotations: Mapping[str, Any] | None,
) -> AnnotationValues | None:
    """
    Extract the ALTER-time old/new pair from a loose annotation mapping.

    The value may be an `AnnotationValues`, an ``(old, new)`` pair, or a mapping
    with ``old``/``new`` keys. Returns None when the annotation is not attached.
    """
    if not annotations or HISTORY_TABLE_ANNOTATION not in annotations:
        return None

    value = annotations[HISTORY_TABLE_ANNOTATION]
    if isinstance(value, AnnotationValues):
        return value
    if isinstance(value, Mapping):
        return AnnotationValues(old_value=value.get("old"), new_value=value.get("new"))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return AnnotationValues(old_value=value[0], new_value=value[1])

    raise InvalidAnnotationStateError(
        f"Unrecognised value for the {HISTORY_TABLE_ANNOTATION} annotation: {value!r}"
    )
