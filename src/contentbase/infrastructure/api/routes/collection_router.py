"""Collection engine API routes.

Thin HTTP wrappers around ``CollectionEngine``. Every endpoint answers 200
with the ``{success: bool}`` contract; failure causes only appear in logs.
"""

from typing import Any, Callable

from fastapi import APIRouter, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from contentbase.core.config import get_settings
from contentbase.core.logging import get_logger
from contentbase.infrastructure.api.dependencies import CollectionEngineDep
from contentbase.infrastructure.api.schemas import (
    CreateCollectionRequest,
    DeleteRecordRequest,
    InsertRecordRequest,
    OperationResponse,
    RecordListResponse,
    RecordResponse,
    UpdateRecordRequest,
)

logger = get_logger(__name__)


class CollectionRoute(APIRoute):
    """Route class that collapses malformed requests to ``success: false``."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def collection_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except RequestValidationError as exc:
                logger.warning(
                    "Collection request rejected",
                    method=request.method,
                    path=request.url.path,
                    error_code="request_invalid",
                    errors=[
                        {"loc": list(error.get("loc", ())), "type": error.get("type")}
                        for error in exc.errors()
                    ],
                )
                return JSONResponse(status_code=status.HTTP_200_OK, content={"success": False})

        return collection_route_handler


router = APIRouter(route_class=CollectionRoute)


@router.post(
    "/create",
    status_code=status.HTTP_200_OK,
    response_model=OperationResponse,
    response_model_exclude_none=True,
)
async def create_collection(
    body: CreateCollectionRequest, engine: CollectionEngineDep
) -> OperationResponse:
    """Create a collection table (idempotent)."""
    result = await engine.create_collection(body.table_name, body.schema_)
    return OperationResponse(success=result.success)


@router.post(
    "/insert",
    status_code=status.HTTP_200_OK,
    response_model=OperationResponse,
    response_model_exclude_none=True,
)
async def insert_record(body: InsertRecordRequest, engine: CollectionEngineDep) -> OperationResponse:
    """Insert a record and return its assigned id."""
    result = await engine.insert_record(body.table_name, body.data)
    return OperationResponse(
        success=result.success,
        id=result.record_id if result.success else None,
    )


@router.put(
    "/update",
    status_code=status.HTTP_200_OK,
    response_model=OperationResponse,
    response_model_exclude_none=True,
)
async def update_record(body: UpdateRecordRequest, engine: CollectionEngineDep) -> OperationResponse:
    """Update a record by id."""
    result = await engine.update_record(body.table_name, body.id, body.update_data)
    return OperationResponse(success=result.success)


@router.delete(
    "/delete",
    status_code=status.HTTP_200_OK,
    response_model=OperationResponse,
    response_model_exclude_none=True,
)
async def delete_record(body: DeleteRecordRequest, engine: CollectionEngineDep) -> OperationResponse:
    """Delete a record by id."""
    result = await engine.delete_record(body.table_name, body.id)
    return OperationResponse(success=result.success)


@router.get(
    "/record",
    status_code=status.HTTP_200_OK,
    response_model=RecordResponse,
    response_model_exclude_none=True,
)
async def get_record(
    engine: CollectionEngineDep,
    table_name: str = Query(..., alias="tableName"),
    record_id: str = Query(..., alias="id"),
) -> RecordResponse:
    """Look up one record by id."""
    result = await engine.get_record(table_name, record_id)
    data: dict[str, Any] | None = result.records[0] if result.success else None
    return RecordResponse(success=result.success, data=data)


@router.get(
    "/records",
    status_code=status.HTTP_200_OK,
    response_model=RecordListResponse,
)
async def list_records(
    engine: CollectionEngineDep,
    table_name: str = Query(..., alias="tableName"),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
) -> RecordListResponse:
    """List records ordered by id."""
    settings = get_settings()
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    result = await engine.list_records(table_name, page_size, offset)
    return RecordListResponse(success=result.success, data=result.records)
