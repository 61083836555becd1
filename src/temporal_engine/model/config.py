"""
Load temporal table configuration from YAML.

Expected layout::

    temporal_tables:
      - table: dbo.Products
      - table: sales.Orders
        history_table: audit.OrderHistory
"""

from __future__ import annotations

from pathlib import Path

import yaml

from src.temporal_engine.errors import InvalidInputError
from src.temporal_engine.model.registry import TemporalTableConfig

_ROOT_KEY = "temporal_tables"


def load_temporal_table_configs(config_path: Path | str) -> tuple[TemporalTableConfig, ...]:
    """Read every entry under `temporal_tables` into a TemporalTableConfig."""
    with Path(config_path).open("r") as f:
        full_config = yaml.safe_load(f) or {}

    if _ROOT_KEY not in full_config:
        raise InvalidInputError(f"Key '{_ROOT_KEY}' not found in config {str(config_path)!r}.")

    return tuple(_parse_entry(entry, config_path) for entry in full_config[_ROOT_KEY] or [])


def _parse_entry(entry: dict, config_path: Path | str) -> TemporalTableConfig:
    if not isinstance(entry, dict) or not entry.get("table"):
        raise InvalidInputError(f"Entry {entry!r} in {str(config_path)!r} has no 'table'.")
    return TemporalTableConfig(
        table_name=str(entry["table"]),
        history_table_name=entry.get("history_table"),
    )
