"""Unit tests for the execution gateway against in-memory SQLite."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from contentbase.domain.exceptions import StoreError
from contentbase.domain.services import TypeTag, encode_record, sanitize_table_name
from contentbase.domain.services.schema_validator import validate_collection
from contentbase.infrastructure.persistence.execution_gateway import ExecutionGateway
from contentbase.infrastructure.persistence.statement_builder import Statement, StatementKind


@pytest.fixture
def notes():
    return sanitize_table_name("notes")


async def _create_notes(gateway):
    collection = validate_collection(
        "notes",
        {
            "body": {"type": "text", "constraints": "NOT NULL"},
            "pinned": {"type": "boolean"},
            "meta": {"type": "structured-document"},
        },
    )
    await gateway.execute(gateway.statement_builder().build_create(collection))


@pytest.mark.asyncio
async def test_dialect(gateway):
    assert gateway.dialect == "sqlite"


@pytest.mark.asyncio
async def test_create_and_reflect(gateway, notes):
    assert await gateway.table_exists(notes) is False
    assert await gateway.column_tags(notes) is None

    await _create_notes(gateway)

    assert await gateway.table_exists(notes) is True
    assert await gateway.column_tags(notes) == {
        "id": None,
        "body": None,
        "pinned": TypeTag.BOOLEAN,
        "meta": TypeTag.STRUCTURED_DOCUMENT,
    }


@pytest.mark.asyncio
async def test_insert_returns_assigned_ids(gateway, notes):
    await _create_notes(gateway)
    builder = gateway.statement_builder()

    first = await gateway.execute(builder.build_insert(notes, encode_record({"body": "one"})))
    second = await gateway.execute(builder.build_insert(notes, encode_record({"body": "two"})))

    assert first.inserted_id == 1
    assert second.inserted_id == 2


@pytest.mark.asyncio
async def test_update_delete_row_counts(gateway, notes):
    await _create_notes(gateway)
    builder = gateway.statement_builder()
    await gateway.execute(builder.build_insert(notes, encode_record({"body": "one"})))

    updated = await gateway.execute(builder.build_update(notes, 1, encode_record({"body": "uno"})))
    missing = await gateway.execute(builder.build_update(notes, 99, encode_record({"body": "x"})))
    deleted = await gateway.execute(builder.build_delete(notes, 1))

    assert updated.rows_affected == 1
    assert missing.rows_affected == 0
    assert deleted.rows_affected == 1


@pytest.mark.asyncio
async def test_select_returns_mapped_rows(gateway, notes):
    await _create_notes(gateway)
    builder = gateway.statement_builder()
    await gateway.execute(builder.build_insert(notes, encode_record({"body": "a:b ? %s"})))

    result = await gateway.execute(builder.build_select_one(notes, 1))

    assert result.rows == [{"id": 1, "body": "a:b ? %s", "pinned": None, "meta": None}]


@pytest.mark.asyncio
async def test_constraint_violation_is_store_error(gateway, notes):
    await _create_notes(gateway)
    builder = gateway.statement_builder()

    with pytest.raises(StoreError) as exc_info:
        await gateway.execute(builder.build_insert(notes, encode_record({"pinned": True})))

    assert exc_info.value.code == "store_error"
    assert "NOT NULL" in exc_info.value.diagnostic


@pytest.mark.asyncio
async def test_missing_table_is_store_error(gateway, notes):
    builder = gateway.statement_builder()
    with pytest.raises(StoreError):
        await gateway.execute(builder.build_insert(notes, encode_record({"body": "x"})))


@pytest.mark.asyncio
async def test_unreachable_store_is_store_error(notes):
    engine = MagicMock()
    engine.dialect.name = "sqlite"
    engine.begin.side_effect = OperationalError("connect", {}, Exception("unable to open database file"))
    gateway = ExecutionGateway(engine)

    with pytest.raises(StoreError) as exc_info:
        await gateway.execute(gateway.statement_builder().build_delete(notes, 1))

    assert exc_info.value.diagnostic == "unable to open database file"


@pytest.mark.asyncio
async def test_rejects_raw_sql(gateway):
    with pytest.raises(TypeError):
        await gateway.execute("DROP TABLE users")


@pytest.mark.asyncio
async def test_unencodable_statement_text_is_store_error(gateway, notes):
    await _create_notes(gateway)
    statement = Statement(
        StatementKind.INSERT,
        "INSERT INTO \"notes\" (\"body\") VALUES ('\ud800') RETURNING \"id\"",
        notes,
    )

    with pytest.raises(StoreError):
        await gateway.execute(statement)
