"""Outcome of a single engine operation.

The HTTP layer only ever exposes ``success`` (plus the new id for inserts).
``error`` keeps the tagged failure for logging and tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from contentbase.domain.exceptions import CollectionEngineError


class Operation(str, Enum):
    """Engine operations."""

    CREATE = "create"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    GET = "get"
    LIST = "list"


@dataclass
class OperationResult:
    """Result of one engine operation.

    Attributes:
        operation: Which operation produced the result.
        success: The public boolean outcome.
        table: Target table name as given by the caller.
        record_id: Assigned id (insert) or targeted id (update/delete/get).
        rows_affected: Store row count for update/delete.
        records: Normalized rows for get/list.
        error: The engine error behind a failure, if any.
    """

    operation: Operation
    success: bool
    table: Any = None
    record_id: int | None = None
    rows_affected: int | None = None
    records: list[dict[str, Any]] = field(default_factory=list)
    error: CollectionEngineError | None = None

    @property
    def error_code(self) -> str | None:
        """Tag of the failure, or ``None`` on success and zero-row outcomes."""
        return self.error.code if self.error is not None else None
