"""
Errors raised while turning schema operations into SQL Server DDL.

Every message names the table, column, or annotation at fault. Nothing in the
engine catches these; they surface to whoever asked for the DDL.
"""

from __future__ import annotations


class TemporalTableError(Exception):
    """Base class for all temporal table engine errors."""


class InvalidInputError(TemporalTableError, ValueError):
    """A required identifier is empty, or an input cannot be rendered as DDL."""


class UnsupportedTransitionError(TemporalTableError, NotImplementedError):
    """The requested change has no safe DDL (e.g. making a populated table temporal)."""


class InvalidAnnotationStateError(TemporalTableError):
    """A history-table annotation is attached but carries neither an old nor a new value."""


class MissingMetadataError(TemporalTableError, LookupError):
    """Model metadata needed to resolve a name is not available."""
