"""Domain services for the collection engine.

Validation, sanitization and encoding of caller input. These services have
no dependencies on infrastructure or external frameworks.
"""

from contentbase.domain.services.identifier import (
    MAX_IDENTIFIER_LENGTH,
    PRIMARY_KEY_COLUMN,
    SYSTEM_TABLES,
    Identifier,
    primary_key_identifier,
    sanitize,
    sanitize_column_name,
    sanitize_table_name,
)
from contentbase.domain.services.literal_encoder import SqlLiteral, encode, encode_document
from contentbase.domain.services.type_allowlist import (
    TypeTag,
    primary_key_ddl,
    store_type,
    validate_type,
)
from contentbase.domain.services.constraint_parser import parse_constraints
from contentbase.domain.services.record_validator import (
    encode_record,
    validate_record_id,
)
from contentbase.domain.services.schema_validator import (
    validate_collection,
    validate_column,
    validate_schema,
)

__all__ = [
    "Identifier",
    "MAX_IDENTIFIER_LENGTH",
    "PRIMARY_KEY_COLUMN",
    "SYSTEM_TABLES",
    "SqlLiteral",
    "TypeTag",
    "encode",
    "encode_document",
    "encode_record",
    "parse_constraints",
    "primary_key_ddl",
    "primary_key_identifier",
    "sanitize",
    "sanitize_column_name",
    "sanitize_table_name",
    "store_type",
    "validate_collection",
    "validate_column",
    "validate_record_id",
    "validate_schema",
    "validate_type",
]
