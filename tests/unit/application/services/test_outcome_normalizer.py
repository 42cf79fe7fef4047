"""Unit tests for OutcomeNormalizer."""

import pytest
from structlog.testing import capture_logs

from contentbase.application.services import OutcomeNormalizer
from contentbase.domain.entities import Operation
from contentbase.domain.exceptions import (
    InvalidIdentifier,
    InvalidRecordId,
    NoOpUpdate,
    StoreError,
)
from contentbase.domain.services import TypeTag
from contentbase.infrastructure.persistence.execution_gateway import ExecutionResult


class TestFromExecution:

    def test_create_succeeds_without_row_count(self):
        outcome = OutcomeNormalizer.from_execution(
            Operation.CREATE, "posts", ExecutionResult(rows_affected=0)
        )
        assert outcome.success is True

    def test_insert_carries_assigned_id(self):
        outcome = OutcomeNormalizer.from_execution(
            Operation.INSERT, "posts", ExecutionResult(rows_affected=1, inserted_id=12)
        )
        assert outcome.success is True
        assert outcome.record_id == 12

    @pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
    @pytest.mark.parametrize("rows,expected", [(0, False), (1, True)])
    def test_row_count_operations(self, operation, rows, expected):
        outcome = OutcomeNormalizer.from_execution(
            operation, "posts", ExecutionResult(rows_affected=rows), record_id=3
        )
        assert outcome.success is expected
        assert outcome.record_id == 3
        assert outcome.error is None


class TestFromError:

    def test_failure_is_logged_with_code(self):
        with capture_logs() as logs:
            outcome = OutcomeNormalizer.from_error(
                Operation.CREATE, "users", InvalidIdentifier("reserved", name="users")
            )

        assert outcome.success is False
        assert outcome.error_code == "invalid_identifier"
        (entry,) = logs
        assert entry["log_level"] == "warning"
        assert entry["stage"] == "validation"
        assert isinstance(entry["engine_error"], InvalidIdentifier)

    def test_store_failure_stage(self):
        with capture_logs() as logs:
            OutcomeNormalizer.from_error(Operation.INSERT, "posts", StoreError("boom", "disk I/O"))
        assert logs[0]["stage"] == "store"

    def test_noop_update_logged_at_info(self):
        with capture_logs() as logs:
            outcome = OutcomeNormalizer.from_error(Operation.UPDATE, "posts", NoOpUpdate(), 4)

        assert outcome.success is False
        assert outcome.record_id == 4
        assert logs[0]["log_level"] == "info"

    def test_non_integer_record_id_dropped(self):
        outcome = OutcomeNormalizer.from_error(
            Operation.DELETE, "posts", InvalidRecordId("abc"), "abc"
        )
        assert outcome.record_id is None


class TestNormalizeRow:

    def test_documents_and_booleans_decoded(self):
        row = {"id": 1, "meta": '{"a": [1, 2]}', "done": 1, "title": "1"}
        tags = {"id": None, "meta": TypeTag.STRUCTURED_DOCUMENT, "done": TypeTag.BOOLEAN, "title": None}

        assert OutcomeNormalizer.normalize_row(row, tags) == {
            "id": 1,
            "meta": {"a": [1, 2]},
            "done": True,
            "title": "1",
        }

    def test_nulls_pass_through(self):
        row = {"meta": None, "done": None}
        tags = {"meta": TypeTag.STRUCTURED_DOCUMENT, "done": TypeTag.BOOLEAN}
        assert OutcomeNormalizer.normalize_row(row, tags) == row

    def test_malformed_document_kept_as_text(self):
        row = {"meta": "not json"}
        assert OutcomeNormalizer.normalize_row(row, {"meta": TypeTag.STRUCTURED_DOCUMENT}) == row

    def test_row_not_mutated(self):
        row = {"done": 0}
        OutcomeNormalizer.normalize_row(row, {"done": TypeTag.BOOLEAN})
        assert row == {"done": 0}
