"""Statement builder for dynamic collection tables.

Generates DDL and DML text for user-defined collections. Every statement is
assembled only from ``Identifier`` and ``SqlLiteral`` instances (and record
ids validated as integers); plain strings are refused with ``TypeError``,
so unsanitized caller input cannot reach statement text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from contentbase.domain.entities import CollectionDescriptor, ColumnSpec
from contentbase.domain.exceptions import EmptyRecord, EmptySchema, NoOpUpdate
from contentbase.domain.services import (
    Identifier,
    SqlLiteral,
    primary_key_ddl,
    primary_key_identifier,
    store_type,
    validate_record_id,
)


class StatementKind(str, Enum):
    """Shapes of generated statements."""

    CREATE = "create"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT_ONE = "select_one"
    SELECT_MANY = "select_many"


@dataclass(frozen=True)
class Statement:
    """A generated statement ready for the execution gateway."""

    kind: StatementKind
    sql: str
    table: Identifier


def _require(value: Any, expected: type, what: str) -> None:
    if not isinstance(value, expected):
        raise TypeError(f"{what} must be {expected.__name__}, got {type(value).__name__}")


def _require_pairs(pairs: Any) -> list[tuple[Identifier, SqlLiteral]]:
    checked = []
    for column, literal in pairs:
        _require(column, Identifier, "Column")
        _require(literal, SqlLiteral, "Value")
        checked.append((column, literal))
    return checked


class StatementBuilder:
    """Builds statements for one SQL dialect.

    Args:
        dialect: SQLAlchemy dialect name ("sqlite" or "postgresql").
    """

    def __init__(self, dialect: str) -> None:
        # Fail fast on unsupported dialects
        primary_key_ddl(dialect)
        self.dialect = dialect

    def build_column_def(self, column: Identifier, spec: ColumnSpec) -> str:
        """Build the definition of a single caller column."""
        _require(column, Identifier, "Column")
        parts = [column.quoted, store_type(spec.type, self.dialect)]
        constraints = spec.constraints.render()
        if constraints:
            parts.append(constraints)
        return " ".join(parts)

    def build_create(self, collection: CollectionDescriptor) -> Statement:
        """Build ``CREATE TABLE IF NOT EXISTS`` for a collection.

        Raises:
            EmptySchema: If the schema has no columns.
        """
        _require(collection, CollectionDescriptor, "Collection")
        _require(collection.name, Identifier, "Table")

        column_defs = [
            self.build_column_def(column, spec) for column, spec in collection.schema.items()
        ]
        if not column_defs:
            raise EmptySchema()

        pk = primary_key_identifier()
        columns_sql = ", ".join([f"{pk.quoted} {primary_key_ddl(self.dialect)}"] + column_defs)
        sql = f"CREATE TABLE IF NOT EXISTS {collection.name.quoted} ({columns_sql})"
        return Statement(StatementKind.CREATE, sql, collection.name)

    def build_insert(
        self, table: Identifier, values: list[tuple[Identifier, SqlLiteral]]
    ) -> Statement:
        """Build an ``INSERT`` returning the assigned id.

        Raises:
            EmptyRecord: If there are no column values.
        """
        _require(table, Identifier, "Table")
        pairs = _require_pairs(values)
        if not pairs:
            raise EmptyRecord()

        columns = ", ".join(column.quoted for column, _ in pairs)
        literals = ", ".join(literal.text for _, literal in pairs)
        pk = primary_key_identifier()
        sql = f"INSERT INTO {table.quoted} ({columns}) VALUES ({literals}) RETURNING {pk.quoted}"
        return Statement(StatementKind.INSERT, sql, table)

    def build_update(
        self, table: Identifier, record_id: Any, values: list[tuple[Identifier, SqlLiteral]]
    ) -> Statement:
        """Build an ``UPDATE`` of one record.

        Raises:
            NoOpUpdate: If there is nothing to set.
            InvalidRecordId: If the id is not a positive integer.
        """
        _require(table, Identifier, "Table")
        pairs = _require_pairs(values)
        if not pairs:
            raise NoOpUpdate()
        record_id = validate_record_id(record_id)

        assignments = ", ".join(f"{column.quoted} = {literal.text}" for column, literal in pairs)
        sql = f"UPDATE {table.quoted} SET {assignments} WHERE {self._id_predicate(record_id)}"
        return Statement(StatementKind.UPDATE, sql, table)

    def build_delete(self, table: Identifier, record_id: Any) -> Statement:
        """Build a ``DELETE`` of one record.

        Raises:
            InvalidRecordId: If the id is not a positive integer.
        """
        _require(table, Identifier, "Table")
        record_id = validate_record_id(record_id)
        sql = f"DELETE FROM {table.quoted} WHERE {self._id_predicate(record_id)}"
        return Statement(StatementKind.DELETE, sql, table)

    def build_select_one(self, table: Identifier, record_id: Any) -> Statement:
        """Build a lookup of one record by id."""
        _require(table, Identifier, "Table")
        record_id = validate_record_id(record_id)
        sql = f"SELECT * FROM {table.quoted} WHERE {self._id_predicate(record_id)}"
        return Statement(StatementKind.SELECT_ONE, sql, table)

    def build_select_many(self, table: Identifier, limit: int, offset: int = 0) -> Statement:
        """Build a page of records ordered by id."""
        _require(table, Identifier, "Table")
        for value, what in ((limit, "limit"), (offset, "offset")):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{what} must be a non-negative integer")

        pk = primary_key_identifier()
        sql = f"SELECT * FROM {table.quoted} ORDER BY {pk.quoted} LIMIT {limit} OFFSET {offset}"
        return Statement(StatementKind.SELECT_MANY, sql, table)

    def _id_predicate(self, record_id: int) -> str:
        return f"{primary_key_identifier().quoted} = {record_id}"
