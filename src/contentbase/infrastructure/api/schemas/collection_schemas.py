"""Pydantic schemas for collection engine endpoints.

Request bodies keep the camelCase keys of the public contract. Structural
content (schema entries, column names, values, record ids) is left loosely
typed here: the collection engine validates it and logs the precise cause.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ColumnDefinition(BaseModel):
    """Documented shape of one schema entry (``{type, constraints}``)."""

    type: str = Field(
        ...,
        description="text, integer, boolean, timestamp, date, numeric or structured-document",
    )
    constraints: str | None = Field(
        default=None,
        description="Optional: NOT NULL, NULL, UNIQUE, DEFAULT <literal>",
    )


class CreateCollectionRequest(BaseModel):
    """Request body for creating a collection."""

    model_config = ConfigDict(populate_by_name=True)

    table_name: str = Field(..., alias="tableName", description="Collection table name")
    schema_: dict[str, Any] = Field(
        ...,
        alias="schema",
        description="Mapping of column name to ColumnDefinition",
        json_schema_extra={"additionalProperties": ColumnDefinition.model_json_schema()},
    )


class InsertRecordRequest(BaseModel):
    """Request body for inserting a record."""

    model_config = ConfigDict(populate_by_name=True)

    table_name: str = Field(..., alias="tableName")
    data: dict[str, Any] = Field(..., description="Mapping of column name to value")


class UpdateRecordRequest(BaseModel):
    """Request body for updating a record."""

    model_config = ConfigDict(populate_by_name=True)

    table_name: str = Field(..., alias="tableName")
    id: Any = Field(..., description="Record id (positive integer)")
    update_data: dict[str, Any] = Field(
        ..., alias="updateData", description="Mapping of column name to new value"
    )


class DeleteRecordRequest(BaseModel):
    """Request body for deleting a record."""

    model_config = ConfigDict(populate_by_name=True)

    table_name: str = Field(..., alias="tableName")
    id: Any = Field(..., description="Record id (positive integer)")


class OperationResponse(BaseModel):
    """Uniform result of a write operation."""

    success: bool
    id: int | None = Field(default=None, description="Assigned id, present after an insert")


class RecordResponse(BaseModel):
    """Result of a single-record lookup."""

    success: bool
    data: dict[str, Any] | None = None


class RecordListResponse(BaseModel):
    """Result of a record listing."""

    success: bool
    data: list[dict[str, Any]] = Field(default_factory=list)
