"""Execution gateway between generated statements and the relational store.

Each statement runs in its own transaction and is handed to the driver as
is (``exec_driver_sql``), so SQLAlchemy never parses literal text for bind
parameters. Store failures of any kind come back as ``StoreError``.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import inspect
from sqlalchemy import types as sqltypes
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from contentbase.core.logging import get_logger
from contentbase.domain.exceptions import StoreError
from contentbase.domain.services import Identifier, TypeTag
from contentbase.infrastructure.persistence.statement_builder import (
    Statement,
    StatementBuilder,
    StatementKind,
)

logger = get_logger(__name__)


@dataclass
class ExecutionResult:
    """What the store reported for one statement."""

    rows_affected: int = 0
    inserted_id: int | None = None
    rows: list[dict[str, Any]] = field(default_factory=list)


def _diagnostic(error: Exception) -> str:
    # DBAPI errors are wrapped; the driver message is the useful part
    original = getattr(error, "orig", None)
    return str(original if original is not None else error)


def _reflected_tag(column_type: Any) -> TypeTag | None:
    if isinstance(column_type, sqltypes.JSON):
        return TypeTag.STRUCTURED_DOCUMENT
    if isinstance(column_type, sqltypes.Boolean):
        return TypeTag.BOOLEAN
    return None


class ExecutionGateway:
    """Runs statements against an async SQLAlchemy engine.

    Args:
        engine: SQLAlchemy async engine.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    @property
    def dialect(self) -> str:
        """SQLAlchemy dialect name of the underlying store."""
        return self.engine.dialect.name

    def statement_builder(self) -> StatementBuilder:
        """A statement builder for this gateway's dialect."""
        return StatementBuilder(self.dialect)

    async def execute(self, statement: Statement) -> ExecutionResult:
        """Execute one statement in its own transaction.

        Args:
            statement: The statement to run.

        Returns:
            Row count, assigned id (insert) or fetched rows (select).

        Raises:
            StoreError: If the store rejects the statement or is unreachable.
        """
        if not isinstance(statement, Statement):
            raise TypeError(f"Expected Statement, got {type(statement).__name__}")

        logger.debug(
            "Executing statement",
            kind=statement.kind.value,
            table=statement.table.name,
            sql=statement.sql,
        )

        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(statement.sql)

                if statement.kind is StatementKind.INSERT:
                    inserted_id = result.scalar_one()
                    return ExecutionResult(rows_affected=1, inserted_id=int(inserted_id))

                if statement.kind in (StatementKind.SELECT_ONE, StatementKind.SELECT_MANY):
                    rows = [dict(row._mapping) for row in result.fetchall()]
                    return ExecutionResult(rows_affected=len(rows), rows=rows)

                # DDL reports -1
                return ExecutionResult(rows_affected=max(result.rowcount, 0))
        except (SQLAlchemyError, OSError, UnicodeError) as e:
            raise StoreError(
                f"Store rejected {statement.kind.value} statement on {statement.table.name!r}",
                diagnostic=_diagnostic(e),
            ) from e

    async def table_exists(self, table: Identifier) -> bool:
        """Check whether a table exists in the store.

        Raises:
            StoreError: If the store cannot be inspected.
        """
        return await self.column_tags(table) is not None

    async def column_tags(self, table: Identifier) -> dict[str, TypeTag | None] | None:
        """Reflect a table's columns as type tags.

        Only tags that need result conversion (documents, booleans) are
        resolved; every other column maps to ``None``.

        Returns:
            Column name to tag, or ``None`` if the table does not exist.

        Raises:
            StoreError: If the store cannot be inspected.
        """

        def _reflect(sync_conn: Any) -> dict[str, TypeTag | None] | None:
            inspector = inspect(sync_conn)
            if not inspector.has_table(table.name):
                return None
            return {
                column["name"]: _reflected_tag(column["type"])
                for column in inspector.get_columns(table.name)
            }

        try:
            async with self.engine.connect() as conn:
                return await conn.run_sync(_reflect)
        except (SQLAlchemyError, OSError, UnicodeError) as e:
            raise StoreError(
                f"Could not inspect table {table.name!r}", diagnostic=_diagnostic(e)
            ) from e
