"""
History table naming.

An annotation value of "DEFAULT" (or blank) derives the history table name
from the live table: the singularized table name plus "History", so
``dbo.Products`` keeps its history in ``dbo.ProductHistory``. An explicit value
is used as given; when it has no schema it lives next to its table.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Protocol

import inflect

from src.constants import DEFAULT_HISTORY_TABLE_NAME, HISTORY_TABLE_SUFFIX
from src.temporal_engine.identifiers import QualifiedName, parse_qualified_name, with_schema
from src.temporal_engine.utils import is_blank

# Last word of a PascalCase, camelCase, snake_case or ALLCAPS identifier.
_LAST_WORD = re.compile(r"([A-Z]?[a-z]+|[A-Z]+)$")
_SINGULAR_ENDINGS = ("ss", "is", "us")


class Singularizer(Protocol):
    """Anything that can turn a plural noun into its singular form."""

    def singularize(self, word: str) -> str: ...


class InflectSingularizer:
    """Singularizer backed by the `inflect` English inflection engine."""

    def __init__(self, engine: inflect.engine | None = None) -> None:
        self._engine = engine or inflect.engine()

    def singularize(self, word: str) -> str:
        """
        Singularize the last word of an identifier, leaving the rest untouched:
        ``Products`` → ``Product``, ``OrderLines`` → ``OrderLine``. Singular
        words come back unchanged.
        """
        match = _LAST_WORD.search(word)
        if match is None:
            return word
        head, last = word[: match.start()], match.group(0)
        return head + self._singular_word(last)

    def _singular_word(self, word: str) -> str:
        # inflect strips the "s" from singulars such as Address, Analysis and Status.
        if word.lower().endswith(_SINGULAR_ENDINGS):
            return word
        singular = self._engine.singular_noun(word)
        if not singular or self._engine.plural_noun(singular).lower() != word.lower():
            return word
        return singular


@lru_cache(maxsize=1)
def default_singularizer() -> Singularizer:
    """Process-wide shared singularizer."""
    return InflectSingularizer()


def is_default_history_table_name(raw_annotation: str | None) -> bool:
    """True when the annotation asks for the derived default name."""
    return is_blank(raw_annotation) or raw_annotation.strip() == DEFAULT_HISTORY_TABLE_NAME


def default_history_table_name(table_name: QualifiedName, singularizer: Singularizer) -> str:
    """``<singular table name>History``."""
    return singularizer.singularize(table_name.name) + HISTORY_TABLE_SUFFIX


def resolve_history_table_name(
    table_name: QualifiedName,
    raw_annotation: str | None,
    singularizer: Singularizer | None = None,
) -> QualifiedName:
    """
    Resolve the schema-qualified history table name for `table_name`.

    - blank or "DEFAULT": derived name in the table's schema.
    - "schema.Name": returned as parsed.
    - "Name": placed in the table's schema (default schema when the table has none).
    """
    if is_default_history_table_name(raw_annotation):
        singularizer = singularizer or default_singularizer()
        history_name = QualifiedName(name=default_history_table_name(table_name, singularizer))
    else:
        history_name = parse_qualified_name(raw_annotation)

    return with_schema(history_name, table_name.schema)
