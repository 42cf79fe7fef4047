"""Closed allow-list of column types.

Only these tags ever reach generated DDL; the store type for each is looked
up per dialect, never taken from caller input.
"""

from enum import Enum

from contentbase.domain.exceptions import UnsupportedType


class TypeTag(str, Enum):
    """Supported column types for collection schemas."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    DATE = "date"
    NUMERIC = "numeric"
    STRUCTURED_DOCUMENT = "structured-document"


# Alternate spellings accepted from callers
TYPE_ALIASES = {
    "json": TypeTag.STRUCTURED_DOCUMENT,
    "jsonb": TypeTag.STRUCTURED_DOCUMENT,
    "document": TypeTag.STRUCTURED_DOCUMENT,
    "structured_document": TypeTag.STRUCTURED_DOCUMENT,
}

# Store type for each tag, per SQLAlchemy dialect name
DIALECT_TYPES: dict[str, dict[TypeTag, str]] = {
    "sqlite": {
        TypeTag.TEXT: "TEXT",
        TypeTag.INTEGER: "INTEGER",
        TypeTag.BOOLEAN: "BOOLEAN",
        TypeTag.TIMESTAMP: "TIMESTAMP",
        TypeTag.DATE: "DATE",
        TypeTag.NUMERIC: "NUMERIC",
        TypeTag.STRUCTURED_DOCUMENT: "JSON",
    },
    "postgresql": {
        TypeTag.TEXT: "TEXT",
        TypeTag.INTEGER: "INTEGER",
        TypeTag.BOOLEAN: "BOOLEAN",
        TypeTag.TIMESTAMP: "TIMESTAMP",
        TypeTag.DATE: "DATE",
        TypeTag.NUMERIC: "NUMERIC",
        TypeTag.STRUCTURED_DOCUMENT: "JSONB",
    },
}

PRIMARY_KEY_DDL = {
    "sqlite": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "SERIAL PRIMARY KEY",
}


def validate_type(tag: object, column: str | None = None) -> TypeTag:
    """Resolve a caller type string to a ``TypeTag``.

    Args:
        tag: The raw type, matched case-insensitively.
        column: Column name, included in the error for diagnostics.

    Returns:
        The matching type tag.

    Raises:
        UnsupportedType: If the type is not in the allow-list.
    """
    if isinstance(tag, TypeTag):
        return tag
    if not isinstance(tag, str):
        raise UnsupportedType(tag, column)

    normalized = tag.strip().lower()
    if normalized in TYPE_ALIASES:
        return TYPE_ALIASES[normalized]
    try:
        return TypeTag(normalized)
    except ValueError:
        raise UnsupportedType(tag, column) from None


def store_type(tag: TypeTag, dialect: str) -> str:
    """Look up the store column type for a tag.

    Raises:
        ValueError: If the dialect is not supported.
    """
    try:
        return DIALECT_TYPES[dialect][tag]
    except KeyError:
        raise ValueError(f"Unsupported database dialect: {dialect}") from None


def primary_key_ddl(dialect: str) -> str:
    """Column definition for the auto-assigned ``id`` primary key."""
    try:
        return PRIMARY_KEY_DDL[dialect]
    except KeyError:
        raise ValueError(f"Unsupported database dialect: {dialect}") from None
