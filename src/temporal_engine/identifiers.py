"""
Identifier utilities for SQL Server objects.

This module defines:
- Two-part name value type: QualifiedName (schema, name).
- Helpers to parse, format, and quote qualified names.
- Deterministic builder for primary key constraint names.

Conventions:
- Verbs: quote_*, format_*, parse_*, build_*.
- Use `table_name` for variables/parameters of type QualifiedName.
- An absent schema means "the default schema" (settings.DEFAULT_SCHEMA, normally dbo).
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from src import settings
from src.constants import MAX_IDENTIFIER_LEN
from src.temporal_engine.errors import InvalidInputError

_SEPARATOR = "."
_QUOTE_TRIGGERS = frozenset(".[]")


# -----------------------------
# Core name data structure
# -----------------------------


@dataclass(frozen=True, eq=False)
class QualifiedName:
    """
    Two-part object name: schema.name.

    Equality treats an absent schema as the default schema, so ``Products`` and
    ``dbo.Products`` name the same object.
    """

    name: str
    schema: str | None = None

    def __post_init__(self) -> None:
        if self.name is None or str(self.name).strip() == "":
            raise InvalidInputError("Object name must not be empty.")
        if self.schema is not None and str(self.schema).strip() == "":
            object.__setattr__(self, "schema", None)

    @property
    def effective_schema(self) -> str:
        """The schema, or the default schema when none is set."""
        return self.schema or settings.DEFAULT_SCHEMA

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QualifiedName):
            return NotImplemented
        return self.name == other.name and self.effective_schema == other.effective_schema

    def __hash__(self) -> int:
        return hash((self.effective_schema, self.name))

    def __str__(self) -> str:
        return format_qualified_name(self)


# -----------------------------
# Parse / format
# -----------------------------


def _split_parts(raw: str) -> list[str]:
    """Split on '.' outside of [bracketed] sections; ']]' inside brackets is a literal ']'."""
    parts: list[str] = []
    current: list[str] = []
    in_brackets = False
    index = 0
    while index < len(raw):
        char = raw[index]
        if in_brackets:
            if char == "]":
                if raw[index + 1 : index + 2] == "]":
                    current.append("]")
                    index += 2
                    continue
                in_brackets = False
            else:
                current.append(char)
        elif char == "[":
            in_brackets = True
        elif char == _SEPARATOR:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    if in_brackets:
        raise InvalidInputError(f"Unterminated '[' in object name: {raw!r}")
    parts.append("".join(current).strip())
    return parts


def parse_qualified_name(raw: str) -> QualifiedName:
    """
    Parse 'schema.name' or 'name' (parts may be [bracket] quoted) into a QualifiedName.

    Raises:
        InvalidInputError: empty input, an empty part, or more than two parts.
    """
    if raw is None or str(raw).strip() == "":
        raise InvalidInputError("Object name must not be empty.")

    parts = _split_parts(str(raw).strip())
    if len(parts) > 2 or any(part == "" for part in parts):
        raise InvalidInputError(f"Expected 'schema.name' or 'name', got: {raw!r}")
    if len(parts) == 1:
        return QualifiedName(name=parts[0])
    return QualifiedName(name=parts[1], schema=parts[0])


def _format_part(part: str) -> str:
    """A part as written; bracketed only when it holds '.', '[' or ']'."""
    if any(char in part for char in _QUOTE_TRIGGERS):
        return quote_identifier(part)
    return part


def format_qualified_name(table_name: QualifiedName) -> str:
    """'schema.name', or just 'name' when no schema is set. Parses back to `table_name`."""
    if table_name.schema:
        return f"{_format_part(table_name.schema)}{_SEPARATOR}{_format_part(table_name.name)}"
    return _format_part(table_name.name)


def format_schema_qualified_name(table_name: QualifiedName) -> str:
    """Always schema-qualified: 'dbo.name' when no schema is set."""
    return (
        f"{_format_part(table_name.effective_schema)}{_SEPARATOR}{_format_part(table_name.name)}"
    )


def with_schema(table_name: QualifiedName, schema: str | None) -> QualifiedName:
    """
    Return `table_name` if it already has a schema; otherwise attach `schema`,
    falling back to the default schema when `schema` is None.
    """
    if table_name.schema:
        return table_name
    return QualifiedName(name=table_name.name, schema=schema or settings.DEFAULT_SCHEMA)


# -----------------------------
# Quoting
# -----------------------------


def quote_identifier(identifier: str) -> str:
    """Quote a single SQL Server identifier with brackets, doubling any embedded ']'."""
    text = str(identifier)
    return f"[{text.replace(']', ']]')}]"


def quote_qualified_name(table_name: QualifiedName) -> str:
    """Bracketed and always schema-qualified: ``[dbo].[Products]``."""
    return f"{quote_identifier(table_name.effective_schema)}.{quote_identifier(table_name.name)}"


# -----------------------------
# Primary key name builder
# -----------------------------


def _short_hash(*parts: str) -> str:
    """
    Deterministic 8-char hex hash for disambiguation in truncated identifiers.
    Uses BLAKE2b. The input is joined with '|' to keep boundaries.
    """
    joined = "|".join(parts).encode("utf-8")
    return hashlib.blake2b(joined, digest_size=4).hexdigest()


def _truncate_with_hash(base: str, max_len: int = MAX_IDENTIFIER_LEN) -> str:
    """
    Truncate a long identifier to `max_len`, appending a suffix of the form '_hhhhhhhh'.
    Guarantees the returned string length is <= `max_len` even for very small limits.
    """
    if len(base) <= max_len:
        return base

    digest = _short_hash(base)
    if max_len <= len(digest):
        return digest[:max_len]

    sep = "_"
    keep = max_len - len(sep) - len(digest)
    if keep <= 0:
        return base[: max_len - len(digest)] + digest

    return f"{base[:keep]}{sep}{digest}"


def build_primary_key_name(table_name: QualifiedName) -> str:
    """
    Build the conventional primary-key constraint name ``PK_<schema>.<table>``.

    The result is truncated with a stable hash suffix to stay within the
    128-character identifier limit.
    """
    base = f"PK_{format_schema_qualified_name(table_name)}"
    return _truncate_with_hash(base, MAX_IDENTIFIER_LEN)
