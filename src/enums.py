"""Enumerations used throughout the temporal table engine."""

from enum import StrEnum


class TemporalTransition(StrEnum):
    """Change of a table's history-table annotation between two model versions."""

    BECOME_TEMPORAL = "become_temporal"
    RENAME_HISTORY = "rename_history"
    REMOVE_TEMPORAL = "remove_temporal"

    @property
    def description(self) -> str:
        """Human readable wording used in log and error messages."""
        mapping = {
            TemporalTransition.BECOME_TEMPORAL: "convert table to a temporal table",
            TemporalTransition.RENAME_HISTORY: "rename history table",
            TemporalTransition.REMOVE_TEMPORAL: "convert temporal table to a regular table",
        }
        return mapping[self]
