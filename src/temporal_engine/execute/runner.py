"""
Statement Runner

Purpose
-------
Run generated DDL statements in the order given.

Design
------
- No SQL rendering here; statements arrive fully formed from the generators.
- Respects ExecutionPolicy:
  - dry_run=True: nothing is executed; every statement is reported SKIPPED.
  - stop_on_first_error=True: after the first FAILED statement, the rest are
    marked SKIPPED with a short-circuit message.
- Never retries, commits or rolls back. Statements already run stay applied;
  transaction control belongs to the caller that owns the connection.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from src.logger import LOGGER
from src.temporal_engine.execute.ports import (
    ApplyReport,
    ApplyStatus,
    ExecutionPolicy,
    StatementExecutor,
    StatementResult,
)


class _DbApiCursor(Protocol):
    def execute(self, operation: str) -> Any: ...

    def close(self) -> None: ...


class _DbApiConnection(Protocol):
    def cursor(self) -> _DbApiCursor: ...


class DbApiStatementExecutor:
    """StatementExecutor over a DB-API 2.0 connection (one cursor per statement)."""

    def __init__(self, connection: _DbApiConnection) -> None:
        self._connection = connection

    def execute(self, statement: str) -> None:
        cursor = self._connection.cursor()
        try:
            cursor.execute(statement)
        finally:
            cursor.close()


class MigrationRunner:
    """Run statements one by one through an injected executor."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    def apply(
        self, statements: Sequence[str], *, policy: ExecutionPolicy | None = None
    ) -> ApplyReport:
        """Run `statements` and return an aggregated ApplyReport."""
        policy = policy or ExecutionPolicy()
        results: list[StatementResult] = []

        for index, statement in enumerate(statements):
            if policy.dry_run:
                results.append(
                    StatementResult(statement, ApplyStatus.SKIPPED, f"DRY RUN: {statement}")
                )
                continue

            result = self._run_one(statement)
            results.append(result)
            if result.status == ApplyStatus.FAILED and policy.stop_on_first_error:
                results.extend(self._skip_remaining(statements[index + 1 :]))
                break

        return ApplyReport(results=tuple(results))

    # ---------- helpers ----------

    def _run_one(self, statement: str) -> StatementResult:
        try:
            self._executor.execute(statement)
        except Exception as error:
            LOGGER.error("Statement failed: %s\n%s", error, statement)
            return StatementResult(statement, ApplyStatus.FAILED, str(error))
        return StatementResult(statement, ApplyStatus.OK)

    @staticmethod
    def _skip_remaining(statements: Sequence[str]) -> list[StatementResult]:
        """SKIPPED stubs for statements left after a failure when short-circuiting."""
        return [
            StatementResult(
                statement,
                ApplyStatus.SKIPPED,
                "Skipped due to previous failure (stop_on_first_error)",
            )
            for statement in statements
        ]
