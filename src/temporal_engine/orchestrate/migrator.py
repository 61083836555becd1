"""
High-level orchestration for temporal table migrations.

`Migrator` coordinates the full lifecycle:
  1) Generate DDL for every operation
  2) Run the statements

Fail-fast: generation errors bubble up before a single statement is executed.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.logger import LOGGER
from src.temporal_engine.execute.ports import ApplyReport, ExecutionPolicy
from src.temporal_engine.execute.runner import MigrationRunner
from src.temporal_engine.generate.temporal_generator import TemporalDdlGenerator
from src.temporal_engine.plan.operations import Operation


class Migrator:
    """Coordinates generating and running DDL for a list of schema operations."""

    def __init__(
        self,
        runner: MigrationRunner,
        generator: TemporalDdlGenerator | None = None,
    ) -> None:
        self.runner = runner
        self.generator = generator or TemporalDdlGenerator()

    def migrate(
        self, operations: Sequence[Operation], *, policy: ExecutionPolicy | None = None
    ) -> ApplyReport:
        """
        Generate and run the DDL for `operations`.

        Steps:
          1. Generate all statements (nothing runs if any operation fails).
          2. Run them in order.
        """
        LOGGER.info("Starting migration of %d operation(s).", len(operations))
        statements = self.generator.generate_all(operations)
        report = self.runner.apply(statements, policy=policy)
        if report.ok:
            LOGGER.info("Migration completed: %d statement(s).", len(report.results))
        else:
            LOGGER.error(
                "Migration failed: %d of %d statement(s) failed.",
                len(report.failures),
                len(report.results),
            )
        return report
