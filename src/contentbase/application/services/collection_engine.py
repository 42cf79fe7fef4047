"""Collection engine: the create/insert/update/delete pipeline.

Every operation runs the same two stages. First, caller input is validated
into typed parts (``Identifier``, ``SqlLiteral``, ``SchemaDefinition``).
Then a statement is built from those parts only, executed once, and the
outcome normalized to ``OperationResult``. No engine error escapes an
operation; each one degrades to ``success: false``.
"""

from collections.abc import Mapping
from typing import Any

from contentbase.application.services.outcome_normalizer import OutcomeNormalizer
from contentbase.core.logging import get_logger
from contentbase.domain.entities import Operation, OperationResult
from contentbase.domain.exceptions import CollectionEngineError
from contentbase.domain.services import (
    MAX_IDENTIFIER_LENGTH,
    Identifier,
    TypeTag,
    encode_record,
    sanitize_table_name,
    validate_collection,
)
from contentbase.infrastructure.persistence.execution_gateway import ExecutionGateway

logger = get_logger(__name__)


class CollectionEngine:
    """Schema-validated CRUD over caller-defined tables.

    The engine keeps no state between calls; the store is authoritative.

    Args:
        gateway: Execution gateway for the target store.
        max_identifier_length: Longest accepted table or column name.
    """

    def __init__(
        self, gateway: ExecutionGateway, max_identifier_length: int = MAX_IDENTIFIER_LENGTH
    ) -> None:
        self.gateway = gateway
        self.builder = gateway.statement_builder()
        self.max_identifier_length = max_identifier_length

    async def create_collection(
        self, table_name: Any, schema: Mapping[str, Any]
    ) -> OperationResult:
        """Create a collection table if it does not exist yet.

        Re-creating an existing collection succeeds and leaves its table and
        data untouched, even if the schema differs.
        """
        try:
            collection = validate_collection(table_name, schema, self.max_identifier_length)
            statement = self.builder.build_create(collection)
            result = await self.gateway.execute(statement)
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.CREATE, table_name, e)

        return OutcomeNormalizer.from_execution(Operation.CREATE, table_name, result)

    async def insert_record(self, table_name: Any, data: Mapping[str, Any]) -> OperationResult:
        """Insert one record; the result carries the store-assigned id."""
        try:
            table = sanitize_table_name(table_name, self.max_identifier_length)
            column_tags = await self._column_tags(table, data)
            values = encode_record(data, self.max_identifier_length, column_tags)
            statement = self.builder.build_insert(table, values)
            result = await self.gateway.execute(statement)
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.INSERT, table_name, e)

        return OutcomeNormalizer.from_execution(Operation.INSERT, table_name, result)

    async def update_record(
        self, table_name: Any, record_id: Any, update_data: Mapping[str, Any]
    ) -> OperationResult:
        """Update one record by id.

        An empty ``update_data`` short-circuits to ``success: false``
        without touching the store.
        """
        try:
            table = sanitize_table_name(table_name, self.max_identifier_length)
            column_tags = await self._column_tags(table, update_data)
            values = encode_record(update_data, self.max_identifier_length, column_tags)
            statement = self.builder.build_update(table, record_id, values)
            result = await self.gateway.execute(statement)
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.UPDATE, table_name, e, record_id)

        return OutcomeNormalizer.from_execution(
            Operation.UPDATE, table_name, result, int(record_id)
        )

    async def delete_record(self, table_name: Any, record_id: Any) -> OperationResult:
        """Delete one record by id."""
        try:
            table = sanitize_table_name(table_name, self.max_identifier_length)
            statement = self.builder.build_delete(table, record_id)
            result = await self.gateway.execute(statement)
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.DELETE, table_name, e, record_id)

        return OutcomeNormalizer.from_execution(
            Operation.DELETE, table_name, result, int(record_id)
        )

    async def get_record(self, table_name: Any, record_id: Any) -> OperationResult:
        """Look up one record by id.

        ``success`` is ``False`` when the record does not exist.
        """
        try:
            table = sanitize_table_name(table_name, self.max_identifier_length)
            statement = self.builder.build_select_one(table, record_id)
            result = await self.gateway.execute(statement)
            column_tags = await self.gateway.column_tags(table) or {}
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.GET, table_name, e, record_id)

        records = [OutcomeNormalizer.normalize_row(row, column_tags) for row in result.rows]
        return OperationResult(
            operation=Operation.GET,
            success=bool(records),
            table=table_name,
            record_id=int(record_id),
            rows_affected=0,
            records=records,
        )

    async def list_records(
        self, table_name: Any, limit: int, offset: int = 0
    ) -> OperationResult:
        """Fetch a page of records ordered by id."""
        try:
            table = sanitize_table_name(table_name, self.max_identifier_length)
            statement = self.builder.build_select_many(table, limit, offset)
            result = await self.gateway.execute(statement)
            column_tags = await self.gateway.column_tags(table) or {}
        except CollectionEngineError as e:
            return OutcomeNormalizer.from_error(Operation.LIST, table_name, e)

        records = [OutcomeNormalizer.normalize_row(row, column_tags) for row in result.rows]
        logger.debug("Records listed", table=table_name, count=len(records), offset=offset)
        return OperationResult(
            operation=Operation.LIST,
            success=True,
            table=table_name,
            rows_affected=0,
            records=records,
        )

    async def _column_tags(
        self, table: Identifier, data: Any
    ) -> dict[str, TypeTag | None]:
        """Reflect the target table's column tags for value encoding.

        Empty payloads skip reflection; they never reach the store. A missing
        table yields no tags and fails at execution.
        """
        if isinstance(data, Mapping) and not data:
            return {}
        return await self.gateway.column_tags(table) or {}
