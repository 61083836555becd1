from __future__ import annotations

from src.temporal_engine.errors import InvalidInputError


def check_not_empty(value: str | None, argument_name: str) -> str:
    """Return `value` stripped of surrounding whitespace; raise if nothing is left."""
    if value is None or str(value).strip() == "":
        raise InvalidInputError(f"{argument_name} must not be empty.")
    return str(value).strip()


def escape_sql_literal(value: str) -> str:
    """
    Escape a Python string for use inside an N'...' or '...' SQL literal.
    Doubles single quotes per SQL rules. Empty/None → empty string.
    """
    return (value or "").replace("'", "''")


def is_blank(value: str | None) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or value.strip() == ""
