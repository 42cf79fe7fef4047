"""Schema validation for collection creation requests.

Turns the caller's raw ``{column: {type, constraints}}`` mapping into a
``SchemaDefinition`` of sanitized identifiers, allow-listed types and
parsed constraints. Column order follows the mapping's iteration order.
"""

from collections.abc import Mapping
from typing import Any

from contentbase.domain.entities.collection import (
    CollectionDescriptor,
    ColumnSpec,
    SchemaDefinition,
)
from contentbase.domain.exceptions import (
    EmptySchema,
    InvalidIdentifier,
    UnsupportedType,
)
from contentbase.domain.services.constraint_parser import parse_constraints
from contentbase.domain.services.identifier import (
    MAX_IDENTIFIER_LENGTH,
    Identifier,
    sanitize_column_name,
    sanitize_table_name,
)
from contentbase.domain.services.type_allowlist import validate_type


def validate_column(
    name: object, raw_spec: Any, max_length: int = MAX_IDENTIFIER_LENGTH
) -> tuple[Identifier, ColumnSpec]:
    """Validate one schema entry.

    Returns:
        Tuple of (column identifier, column spec).
    """
    identifier = sanitize_column_name(name, max_length)

    if not isinstance(raw_spec, Mapping) or "type" not in raw_spec:
        raise UnsupportedType(None, identifier.name)

    type_tag = validate_type(raw_spec["type"], identifier.name)
    constraints = parse_constraints(raw_spec.get("constraints"), identifier.name)
    return identifier, ColumnSpec(type=type_tag, constraints=constraints)


def validate_schema(
    raw: Mapping[str, Any], max_length: int = MAX_IDENTIFIER_LENGTH
) -> SchemaDefinition:
    """Validate a raw schema mapping.

    Args:
        raw: Mapping of column name to ``{"type": ..., "constraints": ...}``.
        max_length: Longest accepted column name.

    Returns:
        The validated schema definition.

    Raises:
        EmptySchema: If the mapping has no entries.
        InvalidIdentifier: If a column name is invalid, reserved or duplicated.
        UnsupportedType: If a column type is outside the allow-list.
        InvalidConstraint: If constraint text falls outside the grammar.
    """
    if not isinstance(raw, Mapping) or not raw:
        raise EmptySchema()

    columns = []
    # SQLite compares identifiers case-insensitively, so duplicates do too
    seen_names: set[str] = set()
    for name, raw_spec in raw.items():
        identifier, spec = validate_column(name, raw_spec, max_length)
        folded = identifier.name.casefold()
        if folded in seen_names:
            raise InvalidIdentifier(f"Duplicate column name {identifier.name!r}", name=name)
        seen_names.add(folded)
        columns.append((identifier, spec))

    return SchemaDefinition(columns)


def validate_collection(
    table_name: object, raw_schema: Mapping[str, Any], max_length: int = MAX_IDENTIFIER_LENGTH
) -> CollectionDescriptor:
    """Validate a complete create-collection request."""
    name = sanitize_table_name(table_name, max_length)
    schema = validate_schema(raw_schema, max_length)
    return CollectionDescriptor(name=name, schema=schema)
