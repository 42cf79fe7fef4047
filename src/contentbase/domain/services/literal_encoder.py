"""Literal encoding for values embedded in generated statements.

This is the only place caller-supplied values become statement text.
Strings and documents are single-quoted with every embedded quote doubled;
numbers and booleans are rendered bare; ``None`` becomes the store's NULL.
"""

import json
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from contentbase.domain.exceptions import UnrepresentableValue

_ENCODER_TOKEN = object()


@dataclass(frozen=True)
class SqlLiteral:
    """An encoded literal, safe to place in statement text.

    Only ``encode`` (and the keyword helpers below) can build one.
    """

    text: str
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._token is not _ENCODER_TOKEN:
            raise TypeError("SqlLiteral instances must be created with encode()")

    def __str__(self) -> str:
        return self.text


NULL = SqlLiteral("NULL", _ENCODER_TOKEN)
TRUE = SqlLiteral("TRUE", _ENCODER_TOKEN)
FALSE = SqlLiteral("FALSE", _ENCODER_TOKEN)
CURRENT_TIMESTAMP = SqlLiteral("CURRENT_TIMESTAMP", _ENCODER_TOKEN)
CURRENT_DATE = SqlLiteral("CURRENT_DATE", _ENCODER_TOKEN)


def quote_text(value: str, column: str | None = None) -> SqlLiteral:
    """Quote a string, doubling every embedded single quote."""
    if "\x00" in value:
        raise UnrepresentableValue("Text values must not contain NUL characters", column)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise UnrepresentableValue("Text values must be valid Unicode text", column) from e
    return SqlLiteral("'" + value.replace("'", "''") + "'", _ENCODER_TOKEN)


def encode(value: Any, column: str | None = None) -> SqlLiteral:
    """Encode a Python value as a statement literal.

    Args:
        value: The value to encode.
        column: Column name, included in errors for diagnostics.

    Returns:
        The encoded literal.

    Raises:
        UnrepresentableValue: If the value has no safe literal form.
    """
    if value is None:
        return NULL

    # bool is a subclass of int
    if isinstance(value, bool):
        return TRUE if value else FALSE

    if isinstance(value, int):
        return SqlLiteral(str(value), _ENCODER_TOKEN)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnrepresentableValue(f"Non-finite number {value!r}", column)
        return SqlLiteral(repr(value), _ENCODER_TOKEN)

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise UnrepresentableValue(f"Non-finite number {value!r}", column)
        return SqlLiteral(str(value), _ENCODER_TOKEN)

    if isinstance(value, str):
        return quote_text(value, column)

    # datetime is a subclass of date
    if isinstance(value, (datetime, date)):
        return quote_text(value.isoformat(), column)

    if isinstance(value, (dict, list, tuple)):
        return quote_text(_dump_json(value, column), column)

    raise UnrepresentableValue(
        f"Values of type {type(value).__name__} cannot be stored", column
    )


def encode_document(value: Any, column: str | None = None) -> SqlLiteral:
    """Encode a value bound for a structured-document column.

    Every non-null value, strings and numbers included, is stored as its
    JSON text: ``"123"`` becomes ``'"123"'`` and reads back as a string.

    Raises:
        UnrepresentableValue: If the value is not JSON serializable.
    """
    if value is None:
        return NULL
    return quote_text(_dump_json(value, column), column)


def _dump_json(value: Any, column: str | None) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise UnrepresentableValue(f"Document is not JSON serializable: {e}", column) from e
