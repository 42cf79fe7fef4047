"""Record validation for insert, update, delete and lookup requests.

Record payloads are untyped JSON from the caller. Column names go through
the identifier sanitizer and values through the literal encoder, producing
ordered (identifier, literal) pairs the statement builder can consume.
"""

from collections.abc import Mapping
from typing import Any

from contentbase.domain.exceptions import InvalidIdentifier, InvalidRecordId
from contentbase.domain.services.identifier import (
    MAX_IDENTIFIER_LENGTH,
    Identifier,
    sanitize_column_name,
)
from contentbase.domain.services.literal_encoder import SqlLiteral, encode, encode_document
from contentbase.domain.services.type_allowlist import TypeTag

# Store integer ids are signed 64-bit
MAX_RECORD_ID = 2**63 - 1


def validate_record_id(record_id: Any) -> int:
    """Validate a record identifier.

    Accepts an ``int`` or a string of ASCII digits. Booleans, floats and
    anything non-positive are rejected.

    Raises:
        InvalidRecordId: If the id is not a positive integer.
    """
    if isinstance(record_id, bool):
        raise InvalidRecordId(record_id)

    if isinstance(record_id, int):
        value = record_id
    elif isinstance(record_id, str) and record_id.isascii() and record_id.isdigit():
        value = int(record_id)
    else:
        raise InvalidRecordId(record_id)

    if value < 1 or value > MAX_RECORD_ID:
        raise InvalidRecordId(record_id)
    return value


def encode_record(
    data: Mapping[str, Any],
    max_length: int = MAX_IDENTIFIER_LENGTH,
    column_tags: Mapping[str, TypeTag | None] | None = None,
) -> list[tuple[Identifier, SqlLiteral]]:
    """Sanitize column names and encode values of a record payload.

    An empty mapping yields an empty list; the statement builder decides
    whether that is an ``EmptyRecord`` error or a ``NoOpUpdate``.

    Args:
        data: Mapping of column name to value.
        max_length: Longest accepted column name.
        column_tags: Reflected column tags of the target table. Values for
            structured-document columns are stored as JSON text.

    Raises:
        InvalidIdentifier: If a column name is invalid, reserved or repeated.
        UnrepresentableValue: If a value cannot be encoded.
    """
    if not isinstance(data, Mapping):
        raise InvalidIdentifier("Record data must be a mapping of column names to values")

    # Store column names compare case-insensitively
    document_columns = {
        name.casefold()
        for name, tag in (column_tags or {}).items()
        if tag is TypeTag.STRUCTURED_DOCUMENT
    }

    pairs = []
    seen_names: set[str] = set()
    for name, value in data.items():
        identifier = sanitize_column_name(name, max_length)
        folded = identifier.name.casefold()
        if folded in seen_names:
            raise InvalidIdentifier(f"Duplicate column name {identifier.name!r}", name=name)
        seen_names.add(folded)
        if folded in document_columns:
            literal = encode_document(value, identifier.name)
        else:
            literal = encode(value, identifier.name)
        pairs.append((identifier, literal))
    return pairs
