"""API schemas for request/response validation."""

from contentbase.infrastructure.api.schemas.collection_schemas import (
    ColumnDefinition,
    CreateCollectionRequest,
    DeleteRecordRequest,
    InsertRecordRequest,
    OperationResponse,
    RecordListResponse,
    RecordResponse,
    UpdateRecordRequest,
)

__all__ = [
    "ColumnDefinition",
    "CreateCollectionRequest",
    "DeleteRecordRequest",
    "InsertRecordRequest",
    "OperationResponse",
    "RecordListResponse",
    "RecordResponse",
    "UpdateRecordRequest",
]
