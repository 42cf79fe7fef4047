"""Unit tests for collection entities and operation results."""

from contentbase.domain.entities import ConstraintSet, Operation, OperationResult
from contentbase.domain.exceptions import NoOpUpdate, StoreError
from contentbase.domain.services.literal_encoder import encode
from contentbase.domain.services.schema_validator import validate_schema


def test_constraint_set_render():
    constraints = ConstraintSet(nullable=False, unique=True, default=encode("x"))
    assert constraints.render() == "NOT NULL UNIQUE DEFAULT 'x'"
    assert not constraints.is_empty


def test_schema_definition_is_read_only_mapping():
    schema = validate_schema({"title": {"type": "text"}, "views": {"type": "integer"}})
    assert len(schema) == 2
    first = next(iter(schema))
    assert schema[first].type.value == "text"
    assert "title: text" in repr(schema)
    assert not hasattr(schema, "__setitem__")


def test_operation_result_error_code():
    result = OperationResult(operation=Operation.INSERT, success=False, table="posts", error=StoreError("boom"))
    assert result.error_code == "store_error"


def test_operation_result_without_error():
    result = OperationResult(operation=Operation.UPDATE, success=True, table="posts", record_id=1)
    assert result.error_code is None


def test_noop_update_has_its_own_code():
    assert NoOpUpdate().code == "noop_update"
