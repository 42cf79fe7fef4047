"""Unit tests for the column type allow-list."""

import pytest

from contentbase.domain.exceptions import UnsupportedType
from contentbase.domain.services.type_allowlist import (
    DIALECT_TYPES,
    TypeTag,
    primary_key_ddl,
    store_type,
    validate_type,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("text", TypeTag.TEXT),
        ("TEXT", TypeTag.TEXT),
        ("Integer", TypeTag.INTEGER),
        ("boolean", TypeTag.BOOLEAN),
        ("timestamp", TypeTag.TIMESTAMP),
        ("date", TypeTag.DATE),
        ("numeric", TypeTag.NUMERIC),
        ("structured-document", TypeTag.STRUCTURED_DOCUMENT),
        ("json", TypeTag.STRUCTURED_DOCUMENT),
        ("JSONB", TypeTag.STRUCTURED_DOCUMENT),
        (" date ", TypeTag.DATE),
    ],
)
def test_validate_type_accepts_allow_list(raw, expected):
    assert validate_type(raw) is expected


@pytest.mark.parametrize(
    "raw",
    ["varchar(255)", "TEXT; DROP TABLE users", "blob", "", "int primary key", None, 5],
)
def test_validate_type_rejects_everything_else(raw):
    with pytest.raises(UnsupportedType) as exc_info:
        validate_type(raw, column="title")
    assert exc_info.value.column == "title"
    assert exc_info.value.code == "unsupported_type"


def test_validate_type_passes_tags_through():
    assert validate_type(TypeTag.NUMERIC) is TypeTag.NUMERIC


def test_every_tag_has_a_store_type_per_dialect():
    for dialect, mapping in DIALECT_TYPES.items():
        assert set(mapping) == set(TypeTag), dialect


def test_store_type_lookup():
    assert store_type(TypeTag.STRUCTURED_DOCUMENT, "sqlite") == "JSON"
    assert store_type(TypeTag.STRUCTURED_DOCUMENT, "postgresql") == "JSONB"
    assert store_type(TypeTag.BOOLEAN, "sqlite") == "BOOLEAN"


def test_unknown_dialect():
    with pytest.raises(ValueError):
        store_type(TypeTag.TEXT, "oracle")
    with pytest.raises(ValueError):
        primary_key_ddl("mssql")


def test_primary_key_ddl():
    assert primary_key_ddl("sqlite") == "INTEGER PRIMARY KEY AUTOINCREMENT"
    assert primary_key_ddl("postgresql") == "SERIAL PRIMARY KEY"
