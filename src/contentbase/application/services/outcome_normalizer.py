"""Maps execution results and engine errors to the uniform result contract.

Create and insert succeed unless an error occurred. Update and delete
succeed only when at least one row changed; a zero-row outcome reports
``success: false`` exactly like a failed statement. Failures are logged
with their error code, which is the only place the cause stays visible.
"""

import json
from typing import Any

from contentbase.core.logging import get_logger
from contentbase.domain.entities import Operation, OperationResult
from contentbase.domain.exceptions import (
    VALIDATION_ERRORS,
    CollectionEngineError,
    NoOpUpdate,
    StoreError,
)
from contentbase.domain.services import TypeTag
from contentbase.infrastructure.persistence.execution_gateway import ExecutionResult

logger = get_logger(__name__)

ROW_COUNT_OPERATIONS = frozenset({Operation.UPDATE, Operation.DELETE})


def _stage(error: CollectionEngineError) -> str:
    if isinstance(error, VALIDATION_ERRORS):
        return "validation"
    if isinstance(error, StoreError):
        return "store"
    return "short_circuit"


class OutcomeNormalizer:
    """Builds ``OperationResult`` values for the collection engine."""

    @classmethod
    def from_execution(
        cls,
        operation: Operation,
        table: Any,
        result: ExecutionResult,
        record_id: int | None = None,
    ) -> OperationResult:
        """Normalize a statement that ran without a store error."""
        if operation in ROW_COUNT_OPERATIONS:
            success = result.rows_affected > 0
        else:
            success = True

        outcome = OperationResult(
            operation=operation,
            success=success,
            table=table,
            record_id=result.inserted_id if operation is Operation.INSERT else record_id,
            rows_affected=result.rows_affected,
        )

        if success:
            logger.info(
                "Collection operation succeeded",
                operation=operation.value,
                table=table,
                record_id=outcome.record_id,
                rows_affected=result.rows_affected,
            )
        else:
            logger.info(
                "Collection operation matched no rows",
                operation=operation.value,
                table=table,
                record_id=record_id,
            )
        return outcome

    @classmethod
    def from_error(
        cls,
        operation: Operation,
        table: Any,
        error: CollectionEngineError,
        record_id: Any = None,
    ) -> OperationResult:
        """Collapse an engine error into ``success: false`` and log its tag."""
        stage = _stage(error)
        if isinstance(error, NoOpUpdate):
            logger.info(
                "Collection update skipped",
                operation=operation.value,
                table=table,
                record_id=record_id,
                engine_error=error,
            )
        else:
            logger.warning(
                "Collection operation failed",
                operation=operation.value,
                table=table,
                record_id=record_id,
                stage=stage,
                engine_error=error,
            )

        return OperationResult(
            operation=operation,
            success=False,
            table=table,
            record_id=record_id if isinstance(record_id, int) else None,
            error=error,
        )

    @classmethod
    def normalize_row(
        cls, row: dict[str, Any], column_tags: dict[str, TypeTag | None]
    ) -> dict[str, Any]:
        """Convert stored values back to their caller-facing form.

        Structured documents stored as JSON text are decoded; booleans stored
        as 0/1 become ``bool``. Other values pass through unchanged.
        """
        record = dict(row)
        for column, value in row.items():
            tag = column_tags.get(column)
            if value is None or tag is None:
                continue
            if tag is TypeTag.STRUCTURED_DOCUMENT and isinstance(value, (str, bytes)):
                try:
                    record[column] = json.loads(value)
                except ValueError:
                    # Written outside the engine; keep the stored text
                    pass
            elif tag is TypeTag.BOOLEAN and isinstance(value, int) and not isinstance(value, bool):
                record[column] = bool(value)
        return record
